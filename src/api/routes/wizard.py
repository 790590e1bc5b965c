from dataclasses import dataclass

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import (
    get_availability_handlers,
    get_event_publisher,
    get_listing_gateway,
    get_route_builder,
    get_wizard_flow,
)
from src.api.schemas.wizard import (
    NavigationEntryResponse,
    PanelResponse,
    TabSubmissionRequest,
    WizardErrorsResponse,
    WizardResponse,
)
from src.application.interfaces.availability_handlers import AvailabilityExceptionHandlers
from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.listing_gateway import ListingGateway
from src.application.interfaces.navigation import RouteBuilder
from src.application.use_cases.complete_wizard_tab import CompleteWizardTabOutput
from src.application.wizard.controller import WizardController
from src.application.wizard.navigation import NavigationDispatcher
from src.application.wizard.tab_resolver import NoRenderer, PanelProps
from src.domain.navigation.path_params import EDIT_LISTING_PAGE, PathParams
from src.domain.state_machine.wizard_flow import InvalidWizardConfigurationError, WizardFlow
from src.infrastructure.routing.history import InMemoryHistory

router = APIRouter(prefix="/wizard", tags=["wizard"])

TAB_PATH = "/{slug}/{listing_id}/{page_type}/{tab}"


@dataclass
class _WizardContext:
    controller: WizardController
    history: InMemoryHistory


def _build_context(
    params: PathParams,
    gateway: ListingGateway,
    flow: WizardFlow,
    routes: RouteBuilder,
    publisher: EventPublisher,
    availability: AvailabilityExceptionHandlers,
) -> _WizardContext:
    history = InMemoryHistory(routes.build_path(EDIT_LISTING_PAGE, params))
    controller = WizardController(
        params=params,
        gateway=gateway,
        flow=flow,
        dispatcher=NavigationDispatcher(routes, history),
        event_publisher=publisher,
        availability_handlers=availability,
    )
    return _WizardContext(controller=controller, history=history)


def _resolve_panel(controller: WizardController, tab: str) -> PanelProps:
    try:
        panel = controller.resolve(tab)
    except InvalidWizardConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(panel, NoRenderer):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"No wizard panel for tab {panel.tab}."
        )
    return panel


def _errors_response(controller: WizardController) -> WizardErrorsResponse:
    return WizardErrorsResponse.model_validate(controller.session.errors.as_dict())


def _wizard_response(
    context: _WizardContext, result: CompleteWizardTabOutput | None = None
) -> WizardResponse:
    session = context.controller.session
    listing_id = result.listing_id if result else None
    if listing_id is None and session.listing is not None:
        listing_id = session.listing.id
    return WizardResponse(
        outcome=result.outcome if result else None,
        listing_id=listing_id.uuid if listing_id else None,
        updated_tab=session.updated_tab.value if session.updated_tab else None,
        published=session.new_listing_published,
        navigation=[
            NavigationEntryResponse(action=m.action, url=m.url) for m in context.history.mutations
        ],
        errors=_errors_response(context.controller),
    )


@router.get(TAB_PATH, response_model=PanelResponse)
async def get_panel(
    slug: str,
    listing_id: str,
    page_type: str,
    tab: str,
    gateway: ListingGateway = Depends(get_listing_gateway),
    flow: WizardFlow = Depends(get_wizard_flow),
    routes: RouteBuilder = Depends(get_route_builder),
    publisher: EventPublisher = Depends(get_event_publisher),
    availability: AvailabilityExceptionHandlers = Depends(get_availability_handlers),
) -> PanelResponse:
    """Describe the panel the wizard renders for this URL."""
    params = PathParams(slug=slug, id=listing_id, type=page_type, tab=tab)
    context = _build_context(params, gateway, flow, routes, publisher, availability)
    controller = context.controller

    _resolve_panel(controller, tab)
    await controller.load()
    panel = _resolve_panel(controller, tab)

    listing = controller.session.listing
    return PanelResponse(
        tab=panel.tab.value,
        component=panel.renderer.component,
        persistence_state=controller.persistence_state,
        flow_mode=controller.flow_mode,
        marketplace_tabs=[t.value for t in controller.marketplace_tabs],
        panel_updated=panel.panel_updated,
        update_in_progress=panel.update_in_progress,
        disabled=panel.disabled,
        ready=panel.ready,
        submit_button_text=panel.submit_button_text,
        listing_id=listing.id.uuid if listing is not None and listing.id else None,
        attributes=listing.attributes if listing is not None else {},
        images=controller.session.images,
        availability_exceptions=controller.session.availability_exceptions,
        errors=_errors_response(controller),
    )


@router.post(TAB_PATH, response_model=WizardResponse)
async def submit_tab(
    slug: str,
    listing_id: str,
    page_type: str,
    tab: str,
    body: TabSubmissionRequest,
    gateway: ListingGateway = Depends(get_listing_gateway),
    flow: WizardFlow = Depends(get_wizard_flow),
    routes: RouteBuilder = Depends(get_route_builder),
    publisher: EventPublisher = Depends(get_event_publisher),
    availability: AvailabilityExceptionHandlers = Depends(get_availability_handlers),
) -> WizardResponse:
    """Save a completed tab and report where the browser should go next."""
    params = PathParams(slug=slug, id=listing_id, type=page_type, tab=tab)
    context = _build_context(params, gateway, flow, routes, publisher, availability)

    panel = _resolve_panel(context.controller, tab)
    try:
        result = await panel.submit(body.values)
    except InvalidWizardConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    return _wizard_response(context, result)


@router.post(TAB_PATH + "/next", response_model=WizardResponse)
async def next_tab(
    slug: str,
    listing_id: str,
    page_type: str,
    tab: str,
    gateway: ListingGateway = Depends(get_listing_gateway),
    flow: WizardFlow = Depends(get_wizard_flow),
    routes: RouteBuilder = Depends(get_route_builder),
    publisher: EventPublisher = Depends(get_event_publisher),
    availability: AvailabilityExceptionHandlers = Depends(get_availability_handlers),
) -> WizardResponse:
    """Move on from a tab that saves its own data (availability)."""
    params = PathParams(slug=slug, id=listing_id, type=page_type, tab=tab)
    context = _build_context(params, gateway, flow, routes, publisher, availability)

    panel = _resolve_panel(context.controller, tab)
    on_next_tab = panel.extras.get("on_next_tab")
    if on_next_tab is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tab {panel.tab.value} has no manual next step.",
        )

    await context.controller.load()
    try:
        on_next_tab()
    except InvalidWizardConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    return _wizard_response(context)
