from .dataset import SplitDataset, train_test_split
from .demo import DEMO_CSV, DEMO_FILE_NAME, load_demo_rows
from .parser import parse_csv, parse_excel, process_file_content

__all__ = [
    "SplitDataset",
    "train_test_split",
    "DEMO_CSV",
    "DEMO_FILE_NAME",
    "load_demo_rows",
    "parse_csv",
    "parse_excel",
    "process_file_content",
]
