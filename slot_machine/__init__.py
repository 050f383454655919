"""Three-by-three slot machine engine"""

__version__ = "1.0.0"
