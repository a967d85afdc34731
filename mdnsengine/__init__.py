"""Multicast DNS records, messages, record cache, name probing, hostnames, service providers and resolvers."""

__version__ = "0.1.0"