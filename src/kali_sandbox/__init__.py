"""kali-sandbox — disposable Kali Linux container for running untrusted tools.

Generates the Docker build and compose definitions on first use and drives
the container lifecycle through the docker CLI.
"""

from kali_sandbox.version import __version__

__all__: list[str] = ["__version__"]
