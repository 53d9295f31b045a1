"""Helpers shared across the dashboard domains"""
