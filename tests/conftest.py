import sys
from pathlib import Path
from typing import Dict, List

import pytest

# Make the src/ layout importable when the package is not installed.
SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def render_dump(records: List[Dict[str, str]]) -> str:
    """Render records in the review dump layout, one blank line after each."""
    blocks = []
    for record in records:
        blocks.append("".join(f"{key}: {value}\n" for key, value in record.items()))
    return "\n".join(blocks) + "\n"


@pytest.fixture
def sample_records() -> List[Dict[str, str]]:
    return [
        {
            "product/productId": "B001E4KFG0",
            "review/userId": "A3SGXH7AUHU8GW",
            "review/profileName": "delmartian",
            "review/score": "5.0",
            "review/text": "Good Quality Dog Food: my Labrador is finicky",
        },
        {
            "product/productId": "B00813GRG4",
            "review/userId": "A1D87F6ZCVE5NK",
            "review/score": "1.0",
        },
        {
            "product/productId": "B001E4KFG0",
            "review/userId": "A1D87F6ZCVE5NK",
            "review/score": "4.0",
        },
        {
            "product/productId": "B000LQOCH0",
            "review/summary": "no reviewer on this one",
        },
    ]


@pytest.fixture
def sample_dump(sample_records) -> str:
    return render_dump(sample_records)
