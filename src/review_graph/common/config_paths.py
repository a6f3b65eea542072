import os

"""
Shared project configuration: paths and defaults used by the loaders and
the report.

Assumed layout:
  PROJECT_ROOT/
    data/
      raw/
        finefoods.txt.gz
    src/
      review_graph/
        *.py
"""

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, "..", "..", ".."))

DATA_DIR = os.path.join(PROJECT_ROOT, "data")
DATA_RAW = os.path.join(DATA_DIR, "raw")

DEFAULT_DATASET = os.path.join(DATA_RAW, "finefoods.txt.gz")

# Field keys of the review dump that identify the two sides of an edge.
USER_ID_KEY = "review/userId"
PRODUCT_ID_KEY = "product/productId"

DEFAULT_SAMPLE_SIZE = 1000
DEFAULT_TOP_COUNT = 10
