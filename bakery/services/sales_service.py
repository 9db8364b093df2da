"""
Sales service with transactional logic.
Validates every line before touching stock, then writes the sale and the
decremented products together.
"""
import logging
import secrets
import string
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Union

from bakery.exceptions import BusinessLogicError, InsufficientStockError, NotFoundError, ProductNotFoundError
from bakery.models import Product, Sale, SaleItem, normalize_payment_method
from bakery.services.auth_service import current_user
from bakery.services.product_service import PRODUCTS_KEY, load_products, next_id

logger = logging.getLogger(__name__)

SALES_KEY = 'sales'
RECEIPT_ALPHABET = string.digits + string.ascii_uppercase
RECEIPT_TOKEN_LENGTH = 6
NO_CASHIER_ID = 0


class SaleLineRequest(NamedTuple):
    """One requested line: product and quantity."""
    product_id: int
    qty: int


def load_sales(store) -> List[Sale]:
    return store.get(SALES_KEY, [], model=List[Sale])


def list_sales(store) -> List[Sale]:
    return load_sales(store)


def get_sale(store, sale_id: int) -> Sale:
    for sale in load_sales(store):
        if sale.id == sale_id:
            return sale
    raise NotFoundError('Venda não encontrada', payload={'sale_id': sale_id})


def generate_receipt_code(existing_codes=(), prefix: str = 'LV') -> str:
    """Short random base-36 code, e.g. LV-7K2Q9Z, not present in ``existing_codes``."""
    while True:
        token = ''.join(secrets.choice(RECEIPT_ALPHABET) for _ in range(RECEIPT_TOKEN_LENGTH))
        code = f"{prefix}-{token}"
        if code not in existing_codes:
            return code


def _whole_number(value) -> int:
    """int() that refuses booleans and fractional numbers instead of truncating them."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"Not a whole number: {value!r}")
    return int(value)


def _normalize_lines(items: Iterable[Union[SaleLineRequest, Mapping]]) -> List[SaleLineRequest]:
    lines = []
    for item in items or []:
        try:
            if isinstance(item, SaleLineRequest):
                line = SaleLineRequest(_whole_number(item.product_id), _whole_number(item.qty))
            else:
                line = SaleLineRequest(_whole_number(item['product_id']), _whole_number(item['qty']))
        except (KeyError, TypeError, ValueError):
            raise BusinessLogicError('Item de venda inválido')
        if line.qty <= 0:
            raise BusinessLogicError('A quantidade deve ser maior que 0')
        lines.append(line)

    if not lines:
        raise BusinessLogicError('Carrinho vazio')
    return lines


def _build_items(lines: List[SaleLineRequest], products_by_id: Dict[int, Product]):
    """Validate all lines and return (items, consumed qty per product). Writes nothing."""
    items = []
    consumed: Dict[int, int] = {}

    for index, line in enumerate(lines, start=1):
        product = products_by_id.get(line.product_id)
        if product is None:
            raise ProductNotFoundError(line.product_id)

        # Repeated lines of one product draw from the same stock
        requested = consumed.get(product.id, 0) + line.qty
        if product.quantity < requested:
            raise InsufficientStockError(product.id, product.name, requested, product.quantity)
        consumed[product.id] = requested

        items.append(SaleItem(
            id=index,
            product_id=product.id,
            qty=line.qty,
            unit_price_cents=product.price_cents,
            subtotal_cents=product.price_cents * line.qty
        ))

    return items, consumed


def create_sale(
    store,
    items: Iterable[Union[SaleLineRequest, Mapping]],
    payment_method,
    discount_cents: Optional[int] = 0,
    notifier=None,
    now: Optional[datetime] = None,
    receipt_prefix: str = 'LV'
) -> Sale:
    """
    Record a sale and take its quantities out of stock.

    All-or-nothing: every line is validated before anything is written, and
    the sales and products collections are written in one step.

    Args:
        store: KeyValueStore
        items: Lines as SaleLineRequest or {'product_id', 'qty'} mappings
        payment_method: 'cash', 'card' or 'pix'
        discount_cents: Discount on the whole sale (>= 0)
        notifier: Optional SaleNotifier told about the sale after commit
        now: Issue time (defaults to now)

    Returns:
        Sale: the created sale with its items

    Raises:
        BusinessLogicError: empty cart, bad quantity, discount or payment method
        ProductNotFoundError: a line references an unknown product
        InsufficientStockError: a product has fewer units than requested
    """
    lines = _normalize_lines(items)

    try:
        method = normalize_payment_method(payment_method)
    except ValueError:
        raise BusinessLogicError(f'Forma de pagamento inválida: {payment_method}')

    discount = int(discount_cents or 0)
    if discount < 0:
        raise BusinessLogicError('O desconto não pode ser negativo')

    now = now or datetime.now()

    try:
        with store.transaction():
            # 1. Snapshot
            products = load_products(store)
            sales = load_sales(store)
            products_by_id = {p.id: p for p in products}

            # 2. Validate and price every line
            sale_items, consumed = _build_items(lines, products_by_id)

            # 3. Totals
            total = max(0, sum(item.subtotal_cents for item in sale_items) - discount)
            cashier = current_user(store)

            # 4. Create Sale
            sale = Sale(
                id=next_id(sales),
                cashier_id=cashier.id if cashier else NO_CASHIER_ID,
                total_cents=total,
                discount_cents=discount,
                paid_cents=total,
                payment_method=method,
                issued_at=now,
                receipt_code=generate_receipt_code({s.receipt_code for s in sales}, prefix=receipt_prefix),
                items=sale_items
            )

            # 5. Decrement stock; untouched products pass through unchanged
            updated_products = [
                p.model_copy(update={'quantity': p.quantity - consumed[p.id], 'updated_at': now})
                if p.id in consumed else p
                for p in products
            ]

            store.set_many({
                SALES_KEY: sales + [sale],
                PRODUCTS_KEY: updated_products,
            })
    except (ProductNotFoundError, InsufficientStockError) as e:
        logger.warning(f"[SALES] Sale rejected: {e.message}")
        raise

    logger.info(
        f"[SALES] ✓ Sale #{sale.id} {sale.receipt_code}: {len(sale.items)} item(s), "
        f"total={sale.total_cents} ({sale.payment_method.value})"
    )

    # 6. Post-commit notification
    if notifier is not None:
        notifier.notify(sale)

    return sale
