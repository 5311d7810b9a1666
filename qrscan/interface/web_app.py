"""Mini README: FastAPI facade over the QR scan core.

Structure:
    * create_application - application factory wiring routes to the core.
    * STATUS_CODES - HTTP status for each error category.

Each request acts as one short-lived "screen": ``POST /scans`` mounts a
capture machine on the configured camera provider and presents the posted
code to it, ``GET /scans`` mounts a history engine and ``GET /scans/{id}``
a detail loader. The owner is read from the ``X-Owner-Id`` and
``X-Owner-Email`` headers; a missing id means "not signed in".
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Form, Header, HTTPException
from fastapi.responses import JSONResponse

from ..auth import StaticAuthContext
from ..camera import REGISTRY, DecodeEvent
from ..capture import CaptureMachine, CaptureState
from ..classification import ClassifiedType, classify, supported_types
from ..configuration import get_settings
from ..errors import ErrorCategory, ScanError
from ..history import HistoryEngine, ScanDetailLoader
from ..logging_utils import get_logger
from ..navigation import RecordingNavigator
from ..storage import InMemoryScanStore, Owner, ScanRepository, ScanStore, SortOrder

LOGGER = get_logger(__name__)

STATUS_CODES: Dict[ErrorCategory, int] = {
    ErrorCategory.AUTH: 401,
    ErrorCategory.PERMISSION: 403,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.VALIDATION: 422,
    ErrorCategory.NETWORK: 503,
    ErrorCategory.SERVICE: 503,
    ErrorCategory.UNKNOWN: 500,
}


def _classification_payload(classification: ClassifiedType) -> Dict[str, Any]:
    return {
        "type": classification.content_type.value,
        "icon": classification.icon,
        "label": classification.label,
        "actionable": classification.actionable,
        "action_target": classification.action_target,
    }


def _error_payload(error: ScanError, navigator: RecordingNavigator) -> Dict[str, Any]:
    return {
        "category": error.category.value,
        "message": error.message,
        "retryable": error.retryable,
        "navigation": [intent.kind.value for intent in navigator.intents],
    }


def _raise_for(error: ScanError, navigator: RecordingNavigator) -> None:
    raise HTTPException(status_code=STATUS_CODES[error.category], detail=_error_payload(error, navigator))


def _owner_from_headers(owner_id: Optional[str], owner_email: Optional[str]) -> Optional[Owner]:
    if not owner_id:
        return None
    return Owner(owner_id=owner_id, email=owner_email or "")


def create_application(store: Optional[ScanStore] = None) -> FastAPI:
    """Create the FastAPI application around a single scan store."""

    app = FastAPI(title="QR Scan Core", version="0.1.0")
    settings = get_settings()
    repository = ScanRepository(
        store or InMemoryScanStore(), max_payload_length=settings.max_payload_length
    )

    @app.get("/")
    async def overview() -> JSONResponse:
        """Describe available camera providers and content types."""

        return JSONResponse(
            {
                "camera_providers": list(REGISTRY.available_providers()),
                "camera_provider": settings.camera_provider,
                "content_types": supported_types(),
                "default_sort_order": settings.default_sort_order,
            }
        )

    @app.get("/classify")
    async def classify_payload(data: str, raw_type: str = "qr") -> JSONResponse:
        """Classify a payload without persisting it."""

        return JSONResponse(_classification_payload(classify(data, raw_type)))

    @app.post("/scans", status_code=201)
    async def submit_scan(
        data: str = Form(""),
        raw_type: str = Form("qr"),
        x_owner_id: Optional[str] = Header(None),
        x_owner_email: Optional[str] = Header(None),
    ) -> JSONResponse:
        """Run one capture through the state machine and persist it."""

        navigator = RecordingNavigator()
        camera = REGISTRY.create_configured(settings)
        machine = CaptureMachine(
            camera,
            repository,
            StaticAuthContext(_owner_from_headers(x_owner_id, x_owner_email)),
            navigator,
            login_redirect_delay=settings.login_redirect_delay_seconds,
        )
        try:
            state = await machine.start()
            if state is CaptureState.DENIED:
                raise HTTPException(status_code=409, detail={"state": state.value})
            await machine.handle_decode(DecodeEvent(raw_type=raw_type, data=data))
        finally:
            machine.close()

        if machine.state is CaptureState.FAILED and machine.error is not None:
            _raise_for(machine.error, navigator)
        record = machine.result
        if record is None:
            raise HTTPException(status_code=500, detail={"state": machine.state.value})
        LOGGER.info("Capture via HTTP stored scan %s", record.record_id)
        return JSONResponse(
            {
                "state": machine.state.value,
                "actions": sorted(action.value for action in machine.available_actions),
                "record": record.as_dict(),
                "classification": _classification_payload(classify(record.data, record.raw_type)),
            },
            status_code=201,
        )

    @app.get("/scans")
    async def list_scans(
        sort: Optional[str] = None,
        q: str = "",
        x_owner_id: Optional[str] = Header(None),
        x_owner_email: Optional[str] = Header(None),
    ) -> JSONResponse:
        """Return the caller's scans, ordered and filtered."""

        try:
            sort_order = SortOrder.from_str(sort or settings.default_sort_order)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        navigator = RecordingNavigator()
        engine = HistoryEngine(
            repository,
            StaticAuthContext(_owner_from_headers(x_owner_id, x_owner_email)),
            navigator,
            sort_order=sort_order,
            timestamp_pattern=settings.timestamp_format,
            login_redirect_delay=settings.login_redirect_delay_seconds,
        )
        await engine.load()
        if engine.error is not None:
            _raise_for(engine.error, navigator)
        engine.set_query(q)
        rows = [
            {
                **row.record.as_dict(),
                "scanned_at_text": row.scanned_at_text,
                "classification": _classification_payload(row.classification),
            }
            for row in engine.rows()
        ]
        LOGGER.debug("Returning %s of %s scans", len(rows), len(engine.records))
        return JSONResponse({"sort": sort_order.value, "total": len(engine.records), "scans": rows})

    @app.get("/scans/{record_id}")
    async def scan_detail(
        record_id: str,
        x_owner_id: Optional[str] = Header(None),
        x_owner_email: Optional[str] = Header(None),
    ) -> JSONResponse:
        """Return a single scan owned by the caller."""

        navigator = RecordingNavigator()
        loader = ScanDetailLoader(
            repository,
            StaticAuthContext(_owner_from_headers(x_owner_id, x_owner_email)),
            navigator,
            record_id,
            timestamp_pattern=settings.timestamp_format,
            login_redirect_delay=settings.login_redirect_delay_seconds,
        )
        record = await loader.load()
        if loader.error is not None:
            _raise_for(loader.error, navigator)
        if record is None:
            raise HTTPException(status_code=500, detail="Scan could not be loaded")
        return JSONResponse(
            {
                "record": record.as_dict(),
                "fields": [{"label": label, "value": value} for label, value in loader.fields()],
                "classification": _classification_payload(classify(record.data, record.raw_type)),
            }
        )

    return app
