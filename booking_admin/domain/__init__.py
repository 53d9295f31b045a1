"""Dashboard domains: bookings, technicians, service catalogue, overview"""
