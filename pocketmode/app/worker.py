"""
PocketWorker — corre el event loop de pocket mode en un QThread y emite
señales cada vez que cambia el estado del bolsillo.

El coordinador nunca toca el hilo de la GUI; las llamadas a la superficie
del overlay vuelven al hilo de la GUI a través de UiDispatcher.
"""
from __future__ import annotations
import dataclasses
import threading
from typing import Any, Callable, Dict, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.app.service import PocketModeService
from pocketmode.core.ports import Broadcaster, Collaborators


class SignalBroadcaster(Broadcaster):
    """Reenvía cada broadcast a la plataforma y además lo emite como señal."""

    def __init__(self, inner: Broadcaster, emit: Callable[[bool], None], extra_key: str) -> None:
        self._inner = inner
        self._emit = emit
        self._extra_key = extra_key

    def send(self, action: str, target: str, extras: Dict[str, Any]) -> None:
        self._inner.send(action, target, extras)
        self._emit(bool(extras.get(self._extra_key, False)))


class UiDispatcher(QObject):
    """
    Callable que ejecuta una función en el hilo donde vive este objeto
    (el hilo de la GUI si se crea ahí).
    """

    _invoke = pyqtSignal(object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._invoke.connect(self._run)

    def __call__(self, fn: Callable[[], None]) -> None:
        self._invoke.emit(fn)

    @pyqtSlot(object)
    def _run(self, fn: Callable[[], None]) -> None:
        fn()


class PocketWorker(QThread):
    """
    QThread que aloja PocketModeService.

    Señales emitidas:
        pocket_state_changed — True al mostrar el overlay, False al quitarlo
        status_msg           — string de log para mostrar en la UI
    """

    pocket_state_changed = pyqtSignal(bool)
    status_msg           = pyqtSignal(str)

    def __init__(
        self,
        collaborators: Collaborators,
        config: PocketConfig = default_config,
        ui_dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._stop = threading.Event()

        overrides = {
            "broadcaster": SignalBroadcaster(
                collaborators.broadcaster, self.pocket_state_changed.emit, config.broadcast_extra
            ),
        }
        if ui_dispatch is not None:
            overrides["ui_dispatch"] = ui_dispatch
        self._service = PocketModeService(dataclasses.replace(collaborators, **overrides), config)

    @property
    def service(self) -> PocketModeService:
        return self._service

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Loop principal — corre en el hilo del worker."""
        try:
            self._service.start()
        except Exception as exc:
            self.status_msg.emit(f"[ERROR] No se pudo arrancar: {exc}")
            return

        self.status_msg.emit("Pocket mode iniciado")
        self._service.loop.run_forever(self._stop)

        self._service.stop()
        self.status_msg.emit("Pocket mode detenido")

    def stop(self) -> None:
        self._stop.set()
        self.wait(3000)  # hasta 3s para que el loop termine
