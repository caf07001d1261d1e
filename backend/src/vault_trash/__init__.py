"""Vault trash purge.

Scheduled job that permanently deletes vault ciphers once they have been in
the trash longer than the configured retention period.
"""

__version__ = "0.1.0"
