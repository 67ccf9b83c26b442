from .disk_manager import DiskManager, DiskManagerStats

__all__ = ["DiskManager", "DiskManagerStats"]
