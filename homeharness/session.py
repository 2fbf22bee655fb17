"""
ScenarioSession - everything one scenario attempt owns.

A session bundles the device, the asset origin and the resolved settings for
a single attempt. `open_session` builds a fresh one and tears all of it down
on exit, which is what lets the retry executor start every attempt clean.
"""
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, Type, TypeVar

from .assets import AssetOrigin, PageFixture
from .config import Backend, HarnessConfig
from .device.base import Device
from .errors import AssetOriginError, UnresolvedTransitionError
from .logging_config import get_logger
from .settings import SettingsOverrides
from .waits import wait_until

if TYPE_CHECKING:
    from .robots.base import Screen
    from .robots.transition import Transition

logger = get_logger("homeharness.session")

S = TypeVar("S", bound="Screen")


class ScenarioSession:
    def __init__(
        self,
        device: Device,
        config: Optional[HarnessConfig] = None,
        origin: Optional[AssetOrigin] = None,
        settings: Optional[SettingsOverrides] = None,
    ):
        self.device = device
        self.config = config or HarnessConfig()
        self.origin = origin
        self.settings = settings or SettingsOverrides()
        self._pending: Optional["Transition"] = None

    # ==================== Screens ====================

    def enter(self, screen_cls: Type[S]) -> S:
        """Establish the first screen of a scenario, verifying it is showing."""
        self.ensure_no_pending_transition()
        screen = screen_cls.arrive(self, action=f"enter {screen_cls.__name__}")
        logger.debug_with(f"Entered {screen_cls.__name__}", screen=screen_cls.kind.value)
        return screen

    def wait(self, condition: Callable[[], Any]) -> Any:
        return wait_until(condition, self.config.wait_timeout, self.config.poll_interval)

    # ==================== Transitions ====================

    @property
    def pending_transition(self) -> Optional["Transition"]:
        return self._pending

    def begin_transition(self, transition: "Transition"):
        self.ensure_no_pending_transition()
        self._pending = transition

    def end_transition(self, transition: "Transition"):
        if self._pending is transition:
            self._pending = None

    def ensure_no_pending_transition(self):
        if self._pending is not None:
            raise UnresolvedTransitionError(
                f"Transition '{self._pending.action}' to {self._pending.destination.value} "
                f"must be resolved with .to(...) before anything else"
            )

    # ==================== Fixtures ====================

    def get_page(self, index: int) -> PageFixture:
        if self.origin is None:
            raise AssetOriginError("This session has no asset origin")
        return self.origin.get_page(index)


def create_device(config: HarnessConfig, settings: SettingsOverrides) -> Device:
    if config.backend is Backend.PLAYWRIGHT:
        from .device.playwright_device import PlaywrightDevice
        return PlaywrightDevice.launch(
            config.app_url,
            settings,
            headless=config.headless,
            timeout_ms=max(config.wait_timeout_ms, 1000),
        )

    from .app.simulator import SimulatedBrowserApp
    from .device.simulated import SimulatedDevice
    app = SimulatedBrowserApp(settings, ui_latency=config.ui_latency_ms / 1000)
    return SimulatedDevice(app)


@contextmanager
def open_session(
    config: Optional[HarnessConfig] = None,
    settings: Optional[SettingsOverrides] = None,
) -> Iterator[ScenarioSession]:
    """
    Start an asset origin and a fresh application, yield a session over them.

    Everything is released on exit, including when the scenario body raised.
    A body that returns while a transition is still pending fails here.
    """
    config = config or HarnessConfig()
    settings = settings or SettingsOverrides()

    with AssetOrigin(config.asset_host, config.asset_port) as origin:
        device = create_device(config, settings)
        try:
            session = ScenarioSession(device, config, origin, settings)
            yield session
            session.ensure_no_pending_transition()
        finally:
            device.close()
