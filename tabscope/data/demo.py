"""Bundled sample dataset for trying the tool without an upload."""

from typing import List

from ..utils import Row
from .parser import parse_csv

DEMO_FILE_NAME = "breast_cancer_demo.csv"

DEMO_CSV = """id,diagnosis,radius_mean,texture_mean,perimeter_mean,area_mean,smoothness_mean
1,M,17.99,10.38,122.8,1001,0.1184
2,M,20.57,17.77,132.9,1326,0.08474
3,M,19.69,21.25,130,1203,0.1096
4,M,11.42,20.38,77.58,386.1,0.1425
5,M,20.29,14.34,135.1,1297,0.1003
6,B,12.45,15.7,82.57,477.1,0.1278
7,B,18.25,19.98,119.6,1040,0.09463
8,M,13.71,20.83,90.2,577.9,0.1189
9,B,13,21.82,87.5,519.8,0.1273
10,B,12.46,24.04,83.97,475.9,0.1186"""


def load_demo_rows() -> List[Row]:
    return parse_csv(DEMO_CSV)
