"""
DO DDNS Updater - A dynamic DNS agent for DigitalOcean.

This package keeps a single DigitalOcean DNS record pointed at the
host's current public IPv4 address.
"""

__version__ = "0.1.0"
__author__ = "DO DDNS Updater Contributors"
