"""Admin dashboard API for the local-services booking platform"""
