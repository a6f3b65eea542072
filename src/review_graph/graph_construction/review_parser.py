import bz2
import gzip
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple, Union

from review_graph.common.config_paths import PRODUCT_ID_KEY, USER_ID_KEY


FIELD_SEPARATOR = ": "
BYTE_ORDER_MARK = "\ufeff"


class DatasetReadError(OSError):
    """The review source could not be opened, decompressed or read."""


@dataclass
class ReviewRecord:
    """One review block reduced to the two identifiers that form an edge."""

    user_id: Optional[str] = None
    product_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.user_id is not None and self.product_id is not None

    @property
    def is_empty(self) -> bool:
        return self.user_id is None and self.product_id is None


def open_dataset(path: str) -> BinaryIO:
    """
    Open the dump in binary mode, picking the decompressor from the suffix
    (.gz -> gzip, .bz2 -> bzip2, anything else read as is).
    Lines are decoded one by one later so a bad byte only costs one line.
    """
    suffix = os.path.splitext(path)[1].lower()
    try:
        if suffix == ".gz":
            return gzip.open(path, "rb")
        if suffix == ".bz2":
            return bz2.open(path, "rb")
        return open(path, "rb")
    except OSError as e:
        raise DatasetReadError(f"Cannot open review dataset '{path}': {e}") from e


def decode_lines(
    raw_lines: Iterable[Union[bytes, str]],
    encoding: str = "utf-8",
    verbose: bool = True,
) -> Iterator[str]:
    """
    Decode raw lines, skipping (and reporting) the ones that are not valid text.
    A byte-order mark at the start of the first line is dropped.
    """
    skipped = 0
    for lineno, raw in enumerate(raw_lines, start=1):
        if isinstance(raw, str):
            line = raw
        else:
            try:
                line = raw.decode(encoding)
            except UnicodeDecodeError as e:
                skipped += 1
                if verbose:
                    print(f"⚠️  Skipping undecodable line {lineno}: {e}")
                continue
        if lineno == 1:
            line = line.lstrip(BYTE_ORDER_MARK)
        yield line
    if skipped and verbose:
        print(f"  > Total undecodable lines skipped: {skipped}")


def split_field(line: str) -> Optional[Tuple[str, str]]:
    """Split `key: value` on the first ': '. Returns None for lines without one."""
    key, sep, value = line.partition(FIELD_SEPARATOR)
    if not sep:
        return None
    return key.strip(), value.strip()


def iter_records(
    lines: Iterable[str],
    user_key: str = USER_ID_KEY,
    product_key: str = PRODUCT_ID_KEY,
    close_trailing_record: bool = False,
) -> Iterator[ReviewRecord]:
    """
    Group decoded lines into records separated by blank lines.

    Each yielded record carries whatever identifiers were seen before its
    terminating blank line; it may be incomplete. A last block with no blank
    line after it is dropped unless `close_trailing_record` is set.
    Blocks without either identifier are not yielded. Unknown keys and
    lines without a separator are ignored.
    """
    current = ReviewRecord()

    for line in lines:
        if not line.strip():
            if not current.is_empty:
                yield current
            current = ReviewRecord()
            continue

        field = split_field(line)
        if field is None:
            continue
        key, value = field
        if key == user_key:
            current.user_id = value
        elif key == product_key:
            current.product_id = value

    if close_trailing_record and not current.is_empty:
        yield current
