import logging
import uuid

from exceptions.cart import CartItemNotFoundException, InvalidQuantityException
from models.cart import CartDTO, LineItemDTO
from models.product import ProductDTO, CustomizationDTO

logger = logging.getLogger(__name__)


class CartStore:
    """
    Ordered, in-memory cart for a single customer session.

    Lines are identified by an opaque id. Adding a product with a
    customization that is already in the cart increases that line's
    quantity instead of creating a second line.

    Every mutation increments `revision`; discount allocations computed for
    an older revision are stale and must be recomputed before use.
    """

    def __init__(self):
        self._items: list[LineItemDTO] = []
        self.revision = 0

    @property
    def cart(self) -> CartDTO:
        """Snapshot of the current cart (lines are immutable)."""
        return CartDTO(items=list(self._items))

    @property
    def subtotal(self) -> float:
        return self.cart.subtotal

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    def get_line(self, line_id: str) -> LineItemDTO:
        return self._items[self._index_of(line_id)]

    def add_item(
        self,
        product: ProductDTO,
        customization: CustomizationDTO | None = None,
        quantity: int = 1
    ) -> LineItemDTO:
        """
        Add units of a product with the given customization.

        Merges into the existing line when the same product with an identical
        customization is already present, otherwise appends a new line.

        Args:
            product: Menu product
            customization: Per-unit selections (None means no selections)
            quantity: Units to add (default 1)

        Returns:
            The resulting line

        Raises:
            InvalidQuantityException: If quantity is not positive
        """
        if quantity <= 0:
            raise InvalidQuantityException(quantity)
        customization = customization or CustomizationDTO()

        for index, line in enumerate(self._items):
            if line.matches(product, customization):
                merged = line.model_copy(update={"quantity": line.quantity + quantity})
                self._items[index] = merged
                self._touch()
                logger.debug(f"Merged product {product.id} into line {line.id} (qty {merged.quantity})")
                return merged

        line = LineItemDTO(
            id=uuid.uuid4().hex[:12],
            product=product,
            unit_price=product.price + customization.extra_price,
            quantity=quantity,
            customization=customization,
        )
        self._items.append(line)
        self._touch()
        logger.debug(f"Added product {product.id} as line {line.id} (qty {quantity})")
        return line

    def set_quantity(self, line_id: str, quantity: int) -> LineItemDTO | None:
        """
        Replace a line's quantity; a quantity of zero or less removes the line.

        Returns:
            The updated line, or None when it was removed

        Raises:
            CartItemNotFoundException: If the line does not exist
        """
        index = self._index_of(line_id)
        if quantity <= 0:
            self.remove_item(line_id)
            return None
        updated = self._items[index].model_copy(update={"quantity": quantity})
        self._items[index] = updated
        self._touch()
        return updated

    def remove_item(self, line_id: str) -> None:
        index = self._index_of(line_id)
        del self._items[index]
        self._touch()

    def clear(self) -> None:
        self._items = []
        self._touch()

    def _index_of(self, line_id: str) -> int:
        for index, line in enumerate(self._items):
            if line.id == line_id:
                return index
        raise CartItemNotFoundException(line_id)

    def _touch(self) -> None:
        self.revision += 1
