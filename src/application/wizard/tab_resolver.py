"""
Tab → panel dispatch.

Every WizardTab has exactly one RendererConfig; the module refuses to import
if one is missing. Each resolved panel receives the same contract plus the
extras its renderer declares.
"""
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.application.wizard.errors import WizardErrors
from src.domain.entities.listing import Listing
from src.domain.enums.wizard_tab import WizardTab


@dataclass(frozen=True)
class RendererConfig:
    component: str
    extras: frozenset[str] = frozenset()


RENDERERS: Mapping[WizardTab, RendererConfig] = {
    WizardTab.DETAILS: RendererConfig(
        "EditListingDetailsPanel", frozenset({"on_process_change"})
    ),
    WizardTab.PRICING: RendererConfig("EditListingPricingPanel"),
    WizardTab.PRICING_AND_STOCK: RendererConfig("EditListingPricingAndStockPanel"),
    WizardTab.DELIVERY: RendererConfig("EditListingDeliveryPanel"),
    WizardTab.LOCATION: RendererConfig("EditListingLocationPanel"),
    WizardTab.AVAILABILITY: RendererConfig(
        "EditListingAvailabilityPanel",
        frozenset(
            {
                "availability_exceptions",
                "fetch_exceptions_in_progress",
                "on_add_availability_exception",
                "on_delete_availability_exception",
                "on_next_tab",
            }
        ),
    ),
    WizardTab.PHOTOS: RendererConfig(
        "EditListingPhotosPanel",
        frozenset({"images", "on_image_upload", "on_remove_image"}),
    ),
}

_missing = set(WizardTab) - set(RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer configured for tabs: {sorted(t.value for t in _missing)}")


@dataclass(frozen=True)
class NoRenderer:
    """Resolution result for a tab string the wizard cannot render."""

    tab: str


@dataclass
class PanelProps:
    tab: WizardTab
    renderer: RendererConfig
    listing: Listing | None
    errors: WizardErrors
    panel_updated: bool
    update_in_progress: bool
    disabled: bool
    ready: bool
    submit_button_text: str
    on_submit: Callable[[dict[str, Any]], Awaitable[Any]]
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def is_updated(self) -> bool:
        return self.panel_updated

    @property
    def is_busy(self) -> bool:
        return self.update_in_progress

    async def submit(self, values: dict[str, Any]) -> Any:
        return await self.on_submit(values)


class TabResolver:
    """Builds PanelProps for a tab from whatever the controller exposes."""

    def __init__(
        self,
        common_props: Callable[[WizardTab], dict[str, Any]],
        extra_props: Callable[[WizardTab], dict[str, Any]],
    ) -> None:
        self._common_props = common_props
        self._extra_props = extra_props

    def resolve(self, tab: "str | WizardTab") -> PanelProps | NoRenderer:
        wizard_tab = WizardTab.parse(tab)
        if wizard_tab is None:
            return NoRenderer(tab=str(getattr(tab, "value", tab)))

        renderer = RENDERERS[wizard_tab]
        available = self._extra_props(wizard_tab)
        extras = {name: available[name] for name in renderer.extras if name in available}
        return PanelProps(
            tab=wizard_tab,
            renderer=renderer,
            extras=extras,
            **self._common_props(wizard_tab),
        )
