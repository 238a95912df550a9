"""hsmposix - configuration and mover provisioning for the POSIX HSM copy agent."""

__version__ = "0.1.0"
