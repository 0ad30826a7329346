"""sitedeploy: provision nginx for a static site on a remote host."""

__version__ = "0.1.0"
