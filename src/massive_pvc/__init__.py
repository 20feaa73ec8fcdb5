"""Create many PVCs, mount them all in one pod, then tear everything down."""

__version__ = "0.1.0"
