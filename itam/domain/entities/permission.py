"""Permission domain entity.

An atomic capability identifier in the catalog, independent of persistence.
"""

from dataclasses import dataclass

from itam.domain.enums import PermissionCategory
from itam.domain.exceptions import ValidationException
from itam.domain.value_objects.core import PermissionKey


@dataclass
class PermissionEntity:
    """Catalog permission (key, category, flags).

    The key is normalized to its canonical lowercase form on construction
    and is immutable afterwards; deactivation is the only lifecycle change.
    """

    key: str
    category: PermissionCategory
    description: str = ""
    is_critical: bool = False
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalize the key and category. Raises ValidationException if invalid."""
        try:
            self.key = PermissionKey.parse(self.key).value
        except ValueError as exc:
            raise ValidationException(str(exc), field="key") from exc
        try:
            self.category = PermissionCategory(self.category)
        except ValueError as exc:
            raise ValidationException(
                f"Unknown permission category {self.category!r}; "
                f"expected one of {PermissionCategory.values()}",
                field="category",
            ) from exc

    @property
    def parsed_key(self) -> PermissionKey:
        return PermissionKey.parse(self.key)

    def deactivate(self) -> None:
        """Hide from catalog listings. Grants already copied onto principals are unaffected."""
        self.is_active = False

    def sort_key(self) -> tuple[str, str]:
        """Catalog order: category, then key."""
        return (self.category.value, self.key)
