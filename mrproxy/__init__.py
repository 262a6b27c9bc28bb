"""mrproxy: thin JSON endpoints in front of the GitLab merge request API."""

__version__ = "0.1.0"
