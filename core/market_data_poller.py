import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from core.coingecko_client import CoinGeckoClient, MarketDataError
from core.models import Coin

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch cryptocurrency data. Please try again later."


@dataclass(frozen=True)
class PollState:
    coins: tuple[Coin, ...] = ()
    loading: bool = False
    error: Optional[str] = None


def _run_in_thread(task: Callable[[], None]):
    threading.Thread(target=task, daemon=True).start()


class MarketDataPoller(QObject):
    """
    Polls the markets listing on a fixed-rate timer and owns the coin snapshot.

    Requests run on background threads; results come back through a queued
    signal so state only changes on the GUI thread. Each request gets a
    sequence number and only the newest one may settle the state.
    """

    state_changed = pyqtSignal(object)  # PollState
    coins_updated = pyqtSignal(list)  # list[Coin]
    loading_changed = pyqtSignal(bool)
    error_changed = pyqtSignal(str)  # empty string when cleared

    _request_finished = pyqtSignal(int, object, str)  # seq, coins or None, error

    def __init__(
        self,
        client: CoinGeckoClient,
        interval_seconds: int = 60,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._client = client
        self._dispatch = dispatch or _run_in_thread
        self._state = PollState()
        self._seq = 0
        self._disposed = False

        self._timer = QTimer(self)
        self._timer.setInterval(interval_seconds * 1000)
        self._timer.timeout.connect(self.fetch)

        self._request_finished.connect(self._on_request_finished)

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def coins(self) -> list[Coin]:
        return list(self._state.coins)

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self):
        """Fetch now and then on every timer tick."""
        if self._timer.isActive():
            return

        self._disposed = False
        logger.info(f"Starting market polling every {self._timer.interval() // 1000}s")
        self._timer.start()
        self.fetch()

    def stop(self):
        """Stop the timer; responses still in flight are discarded."""
        if self._disposed:
            return

        self._timer.stop()
        self._disposed = True
        logger.info("Market polling stopped")

    def fetch(self):
        """Issue one markets request."""
        if self._disposed:
            logger.debug("Poller stopped, ignoring fetch")
            return

        self._seq += 1
        seq = self._seq
        self._set_state(replace(self._state, loading=True, error=None))

        self._dispatch(lambda: self._run_request(seq))

    refetch = fetch

    def _run_request(self, seq: int):
        """Worker body. Must not touch state directly."""
        coins = None
        error = ""
        try:
            coins = self._client.fetch_markets()
        except MarketDataError as e:
            logger.error(f"Error fetching data (request #{seq}): {e}")
            error = str(e)
        except Exception as e:
            logger.error(f"Unexpected error fetching data (request #{seq}): {e}", exc_info=True)
            error = str(e)

        try:
            self._request_finished.emit(seq, coins, error)
        except RuntimeError:
            # Poller deleted while the request was in flight
            pass

    def _on_request_finished(self, seq: int, coins: Optional[list], error: str):
        if self._disposed:
            logger.debug(f"Dropping response #{seq} after stop")
            return
        if seq != self._seq:
            logger.debug(f"Dropping stale response #{seq}, latest is #{self._seq}")
            return

        if coins is None:
            self._set_state(replace(self._state, loading=False, error=FETCH_ERROR_MESSAGE))
        else:
            logger.debug(f"Poll #{seq} succeeded with {len(coins)} coins")
            self._set_state(PollState(coins=tuple(coins), loading=False, error=None))

    def _set_state(self, new_state: PollState):
        old_state = self._state
        self._state = new_state

        if new_state.loading != old_state.loading:
            self.loading_changed.emit(new_state.loading)
        if new_state.error != old_state.error:
            self.error_changed.emit(new_state.error or "")
        if new_state.coins is not old_state.coins:
            self.coins_updated.emit(list(new_state.coins))
        self.state_changed.emit(new_state)
