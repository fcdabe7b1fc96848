# ABOUTME: ASGI web entry point for the weather dashboard UI.
# ABOUTME: Creates a Starlette app that keeps one dashboard controller per browser session.

import contextlib
import logging
from collections import OrderedDict
from datetime import date
from uuid import uuid4

import httpx
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from starlette.routing import Route

from src.config import Settings
from src.controller import DashboardController
from src.deps import WeatherDeps, create_http_client
from src.views import render_page

logger = logging.getLogger(__name__)

SESSION_COOKIE = "dashboard_session"


class SessionRegistry:
    """In-memory map from session cookie to that browser's dashboard controller.

    Holds at most `max_sessions` controllers, evicting the least recently used one when full.
    Controllers are never persisted; restarting the process starts every session afresh.
    """

    def __init__(self, deps_factory, today=date.today, max_sessions: int = 1000):
        self._deps_factory = deps_factory
        self.today = today
        self.max_sessions = max(max_sessions, 1)
        self._controllers: OrderedDict[str, DashboardController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def new_controller(self) -> DashboardController:
        return DashboardController(self._deps_factory(), today=self.today)

    def find(self, session_id: str | None) -> DashboardController | None:
        """Return the controller for a known session and mark it as recently used."""
        if not session_id or session_id not in self._controllers:
            return None
        self._controllers.move_to_end(session_id)
        return self._controllers[session_id]

    def get(self, session_id: str | None) -> tuple[str, DashboardController]:
        """Return the controller for `session_id`, creating a new session if it is unknown."""
        controller = self.find(session_id)
        if controller is not None:
            return session_id, controller
        session_id = str(uuid4())
        controller = self.new_controller()
        self._controllers[session_id] = controller
        while len(self._controllers) > self.max_sessions:
            evicted, _ = self._controllers.popitem(last=False)
            logger.debug("Evicted dashboard session %s", evicted)
        logger.debug("Started dashboard session %s", session_id)
        return session_id, controller


def _with_session(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _int_param(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def dashboard(request: Request) -> Response:
    """Render the dashboard, applying any series, page or page_size query parameters first."""
    registry: SessionRegistry = request.app.state.sessions
    session_id = request.cookies.get(SESSION_COOKIE)
    controller = registry.find(session_id)
    if controller is None:
        # Visitors without a session see the defaults; a session starts on the first POST.
        controller = registry.new_controller()
        session_id = None

    params = request.query_params
    if "series" in params:
        controller.select_series(params["series"])
    page_size = _int_param(params.get("page_size"))
    if page_size is not None:
        controller.set_page_size(page_size)
    page = _int_param(params.get("page"))
    if page is not None:
        controller.go_to_page(page)

    html = render_page(controller, today=registry.today())
    response = HTMLResponse(html)
    return _with_session(response, session_id) if session_id else response


async def fetch(request: Request) -> Response:
    """Handle the lookup form: validate, fetch, then redirect back to the dashboard."""
    registry: SessionRegistry = request.app.state.sessions
    session_id, controller = registry.get(request.cookies.get(SESSION_COOKIE))

    form = await request.form()
    await controller.submit(
        str(form.get("latitude", "")),
        str(form.get("longitude", "")),
        str(form.get("start_date", "")),
        str(form.get("end_date", "")),
    )
    return _with_session(RedirectResponse("/", status_code=303), session_id)


async def toggle_theme(request: Request) -> Response:
    registry: SessionRegistry = request.app.state.sessions
    session_id, controller = registry.get(request.cookies.get(SESSION_COOKIE))
    controller.toggle_theme()
    return _with_session(RedirectResponse("/", status_code=303), session_id)


async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok"})


async def server_error(request: Request, exc: Exception) -> Response:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return HTMLResponse("<h1>Something went wrong</h1>", status_code=500)


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    today=date.today,
) -> Starlette:
    """Build the dashboard application.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        http_client: Client for Open-Meteo calls. When omitted, one is created at startup
            and closed at shutdown.
        today: Callable returning the reference date for validation and the date inputs.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level.upper())

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        owned = http_client is None
        client = create_http_client(settings) if owned else http_client
        app.state.sessions = SessionRegistry(
            lambda: WeatherDeps(http_client=client, settings=settings),
            today=today,
            max_sessions=settings.max_sessions,
        )
        logger.info("Weather dashboard started against %s", settings.forecast_url)
        try:
            yield
        finally:
            if owned:
                await client.aclose()

    routes = [
        Route("/", dashboard, methods=["GET"]),
        Route("/fetch", fetch, methods=["POST"]),
        Route("/theme", toggle_theme, methods=["POST"]),
        Route("/health", health, methods=["GET"]),
    ]
    return Starlette(routes=routes, lifespan=lifespan, exception_handlers={Exception: server_error})


app = create_app()
