"""kubev-installer: fetch, verify and install the kubev-downloader binary."""

__version__ = "0.1.0"
