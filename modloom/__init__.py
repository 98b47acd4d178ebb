"""modloom -- module-based bootstrap generator for Garry's Mod addons and gamemodes."""

__version__ = "0.1.0"
