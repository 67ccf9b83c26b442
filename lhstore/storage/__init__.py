from .disk import DiskManager, DiskManagerStats
from .data_file import DataFile, DataFileHeader, DataFileWriter

__all__ = ["DiskManager", "DiskManagerStats",
           "DataFile", "DataFileHeader", "DataFileWriter"]
