"""Money parsing and formatting for Brazilian (pt-BR) amounts stored in centavos."""
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Union

NON_NUMERIC_PATTERN = re.compile(r"[^\d.]")
LEADING_NUMBER_PATTERN = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)")


def parse_localized_amount_to_cents(value: Optional[str]) -> int:
    """
    Parse a user-typed amount (e.g. "12,34", "R$ 1.234,56", "3.5") to centavos.

    Rules:
    - Blank or missing input is 0
    - When both "," and "." appear, dots are thousands separators and the
      comma is the decimal separator
    - Otherwise the first comma (if any) is the decimal separator
    - Currency symbols, spaces and any other characters are dropped
    - Only the leading number is used; no number at all is 0
    - Rounded to the nearest centavo

    Never raises: the editor treats unreadable input as zero.
    """
    if value is None:
        return 0

    cleaned = str(value).strip()
    if not cleaned:
        return 0

    if ',' in cleaned and '.' in cleaned:
        normalized = cleaned.replace('.', '').replace(',', '.', 1)
    else:
        normalized = cleaned.replace(',', '.', 1)

    digits = NON_NUMERIC_PATTERN.sub('', normalized)
    match = LEADING_NUMBER_PATTERN.match(digits)
    if not match:
        return 0

    number = match.group(0)
    # Wide enough for any typed length; the default 28 digits would overflow on quantize
    with localcontext() as ctx:
        ctx.prec = len(number) + 3
        amount = Decimal(number)
        return int((amount * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_cents_to_localized(cents: Union[int, None]) -> str:
    """
    Format centavos with exactly two decimals, dot for thousands and comma
    for decimals (123456 -> "1.234,56").
    """
    cents = int(cents or 0)
    sign = "-" if cents < 0 else ""
    integer_part, decimal_part = divmod(abs(cents), 100)

    reversed_int = str(integer_part)[::-1]
    groups = [reversed_int[i:i+3] for i in range(0, len(reversed_int), 3)]
    integer_formatted = '.'.join(groups)[::-1]

    return f"{sign}{integer_formatted},{decimal_part:02d}"


def money_brl(cents: Union[int, None]) -> str:
    """Format centavos as Brazilian reais: 123456 -> "R$ 1.234,56"."""
    return f"R$ {format_cents_to_localized(cents)}"
