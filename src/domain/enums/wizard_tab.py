from enum import Enum


class WizardTab(str, Enum):
    """Every step the listing wizard knows how to render."""

    DETAILS = "details"
    PRICING = "pricing"
    PRICING_AND_STOCK = "pricing-and-stock"
    DELIVERY = "delivery"
    LOCATION = "location"
    AVAILABILITY = "availability"
    PHOTOS = "photos"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")

    @classmethod
    def parse(cls, value: "str | WizardTab") -> "WizardTab | None":
        """Return the tab for a raw URL segment, or None if it is not supported."""
        try:
            return cls(value)
        except ValueError:
            return None

