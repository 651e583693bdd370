"""CSV balance checker.

Reads a trial-balance style CSV (Account, Description, Debit, Credit),
collects every row problem instead of stopping at the first one, and
reports whether total debits equal total credits.
"""

import csv
import io
from decimal import Decimal
from typing import BinaryIO, Iterable, TextIO

from digiledger.domain.entities import BalanceCheckResult, CsvEntry
from digiledger.logging_config import get_logger
from digiledger.utils.amount_parser import parse_optional_amount

logger = get_logger(__name__)

EXPECTED_COLUMNS = ("Account", "Description", "Debit", "Credit")
EXPECTED_COLUMN_COUNT = len(EXPECTED_COLUMNS)
TEMPLATE_HEADER = ",".join(EXPECTED_COLUMNS)
EMPTY_FILE_ERROR = "CSV file is empty or missing a header row."

TEMPLATE_CSV = (
    f"{TEMPLATE_HEADER}\n"
    "Cash,Received payment from client,1000.00,0.00\n"
    "Revenue,Service income,0.00,1000.00\n"
)


def split_csv_line(line: str) -> list[str]:
    """Split a single CSV line into fields.

    Quoted fields may contain commas, and a doubled quote inside a quoted
    field is a literal quote. Quotes inside unquoted text are kept as-is.
    """
    try:
        return next(csv.reader([line], strict=False))
    except StopIteration:
        return [""]


def is_valid_header(fields: list[str]) -> bool:
    """Check the first four header fields, ignoring case and whitespace."""
    if len(fields) < EXPECTED_COLUMN_COUNT:
        return False
    return all(
        actual.strip().lower() == expected.lower()
        for actual, expected in zip(fields, EXPECTED_COLUMNS)
    )


def parse_balance_csv(lines: Iterable[str]) -> tuple[list[CsvEntry], list[str]]:
    """Parse balance-check CSV lines into entries and row errors.

    Never raises for malformed content: bad rows are skipped and
    described in the returned error list.

    Args:
        lines: Lines of the file, header first, with or without line endings

    Returns:
        Tuple of (entries, errors), both in file order
    """
    entries: list[CsvEntry] = []
    errors: list[str] = []
    line_iter = iter(lines)

    header_line = next(line_iter, None)
    if header_line is None or not header_line.strip():
        errors.append(EMPTY_FILE_ERROR)
        return entries, errors

    header_line = header_line.rstrip("\r\n")
    try:
        header_fields = split_csv_line(header_line)
    except csv.Error:
        header_fields = []
    if not is_valid_header(header_fields):
        errors.append(
            f'Invalid header. Expected: "{TEMPLATE_HEADER}". '
            f'Received: "{header_line.strip()}".'
        )
        return entries, errors

    for line_number, line in enumerate(line_iter, start=2):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        try:
            columns = split_csv_line(line)
        except csv.Error as e:
            errors.append(f"Row {line_number}: Could not parse row ({e}).")
            continue

        if len(columns) < EXPECTED_COLUMN_COUNT:
            errors.append(
                f"Row {line_number}: Expected {EXPECTED_COLUMN_COUNT} columns "
                f"but found {len(columns)}."
            )
            continue

        account, description, debit_raw, credit_raw = (c.strip() for c in columns[:4])

        # One error per row: debit is reported before credit
        try:
            debit = parse_optional_amount(debit_raw)
        except ValueError:
            errors.append(f'Row {line_number}: Invalid debit value "{debit_raw}".')
            continue

        try:
            credit = parse_optional_amount(credit_raw)
        except ValueError:
            errors.append(f'Row {line_number}: Invalid credit value "{credit_raw}".')
            continue

        entries.append(
            CsvEntry(account=account, description=description, debit=debit, credit=credit)
        )

    return entries, errors


def summarize_entries(entries: list[CsvEntry], errors: list[str]) -> BalanceCheckResult:
    """Total the parsed entries and decide whether they balance.

    Equality is exact; a file with a header and no rows balances at zero.
    """
    total_debits = sum((e.debit for e in entries), Decimal("0"))
    total_credits = sum((e.credit for e in entries), Decimal("0"))

    return BalanceCheckResult(
        is_balanced=total_debits == total_credits,
        total_debits=total_debits,
        total_credits=total_credits,
        difference=abs(total_debits - total_credits),
        entry_count=len(entries),
        entries=list(entries),
        errors=list(errors),
    )


class BalanceCheckerService:
    """Service for checking uploaded CSV files for balanced totals."""

    def check_balance(self, stream: BinaryIO | TextIO) -> BalanceCheckResult:
        """Check a CSV stream for balanced debits and credits.

        Args:
            stream: Binary stream of UTF-8 text (a BOM is allowed) or a
                text stream. The stream is left open.

        Returns:
            BalanceCheckResult with totals, parsed entries and row errors
        """
        if isinstance(stream, io.TextIOBase):
            entries, errors = parse_balance_csv(stream)
        else:
            text = io.TextIOWrapper(stream, encoding="utf-8-sig", errors="replace")
            try:
                entries, errors = parse_balance_csv(text)
            finally:
                text.detach()

        result = summarize_entries(entries, errors)
        logger.info(
            "balance_check_completed",
            is_balanced=result.is_balanced,
            entry_count=result.entry_count,
            error_count=len(result.errors),
        )
        return result

    def check_balance_bytes(self, data: bytes) -> BalanceCheckResult:
        """Check CSV content held in memory."""
        return self.check_balance(io.BytesIO(data))

    def generate_template(self) -> bytes:
        """Return a CSV template with the expected header and two example rows."""
        return TEMPLATE_CSV.encode("utf-8")
