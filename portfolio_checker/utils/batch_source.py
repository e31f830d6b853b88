"""Decoding of uploaded domain lists."""

import csv
import logging
from typing import Iterator, List, TextIO


logger = logging.getLogger(__name__)


class MalformedInput(Exception):
    """The batch source could not be decoded into records at all."""


def open_domain_source(stream: TextIO) -> Iterator[str]:
    """Open an uploaded domain list as a stream of names.

    The upload is read as CSV and every field of every record is a domain
    name, so a plain list with one name per line works as well. Blank lines
    are skipped. The first record is read before returning, so an
    undecodable upload fails here and not halfway through a batch. Input
    ends early at a later record that cannot be decoded or whose field
    count differs from the first record.

    Args:
        stream: Text stream opened with newline="".

    Returns:
        Iterator[str]: Domain names in input order, untrimmed.

    Raises:
        MalformedInput: If the stream is empty or its first record is invalid.

    Examples:
        >>> import io
        >>> list(open_domain_source(io.StringIO("example.nl,example.com\\nsidn.nl,sidn.com\\n")))
        ['example.nl', 'example.com', 'sidn.nl', 'sidn.com']
    """
    reader = csv.reader(stream, strict=True)
    try:
        first = next(reader)
        while not first:
            first = next(reader)
    except StopIteration:
        raise MalformedInput("Malformed CSV: empty input")
    except (csv.Error, UnicodeDecodeError) as e:
        raise MalformedInput(f"Malformed CSV: {e}") from e

    return _iter_names(first, reader)


def _iter_names(first: List[str], reader) -> Iterator[str]:
    yield from first
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except (csv.Error, UnicodeDecodeError) as e:
            # Unreadable tail ends the input, what was read still counts
            logger.warning(f"Stopped reading domain list at line {reader.line_num}: {e}")
            return
        if not record:
            continue
        if len(record) != len(first):
            logger.warning(
                f"Stopped reading domain list at line {reader.line_num}: "
                f"expected {len(first)} fields, got {len(record)}"
            )
            return
        yield from record
