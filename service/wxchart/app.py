from altair.utils import spec_to_html
from contextlib import asynccontextmanager
import datetime
import logging
from fastapi import FastAPI, HTTPException, Request, status, Response
from fastapi.responses import HTMLResponse, JSONResponse

from service.wxchart.base import logging_config as _  # configure logging

from service.wxchart import models
from service.wxchart.base.errors import DataLoadError, NoDataError
from service.wxchart.charts import charts
from service.wxchart.data import loader
from service.wxchart.data import transform as tf
from service.wxchart.env import DataSourceConfig
from service.wxchart.selection import catalog
from service.wxchart.selection.state import SelectionState
from service.wxchart.selection.toggle import SelectionController


logger = logging.getLogger("app")

LOAD_ERROR_MESSAGE = "Failed to load weather data. Please try again later."


def _load_daily(config: DataSourceConfig):
    """Loads and merges all CSV sources. Returns (df, error message)."""
    try:
        raw = loader.load_all(config)
        df = tf.daily_records(raw)
    except (DataLoadError, NoDataError) as e:
        logger.error("Could not load weather data from %s: %s", config.describe(), e)
        return None, str(e)
    logger.info(
        "Loaded %d daily records (%s to %s)",
        len(df),
        df.index.min().date(),
        df.index.max().date(),
    )
    return df, None


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = DataSourceConfig.from_env()
    app.state.daily, app.state.load_error = _load_daily(config)

    app.state.server_options = models.ServerOptions(
        data_source=config.describe(),
        start_time=datetime.datetime.now(tz=datetime.timezone.utc),
    )

    # Rendered charts, by (variant, selection). Cleared on every selection change.
    app.state.charts = {}
    app.state.selection = SelectionController()

    def _invalidate_charts(state: SelectionState):
        logger.debug("Selection changed: %s", state.order)
        app.state.charts.clear()

    app.state.selection.add_listener(_invalidate_charts)

    yield

    logger.info("Shutting down")


# Always create the app, we're running this thing with uvicorn ONLY.
app = FastAPI(lifespan=lifespan)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def _daily():
    """Returns the loaded daily records.

    Raises:
        DataLoadError if loading failed at startup.
    """
    if app.state.daily is None:
        raise DataLoadError(app.state.load_error or "No data loaded")
    return app.state.daily


def _variant(variant: str | None) -> str:
    if variant is None:
        return charts.VARIANT_PRIMARY
    if variant not in charts.VARIANTS:
        raise _bad_request(
            f"Invalid variant, must be one of {','.join(charts.VARIANTS)}"
        )
    return variant


def _selection_view() -> models.SelectionView:
    return models.SelectionView.from_state(app.state.selection.state)


def _render_html(chart: charts.AltairChart) -> Response:
    # NOTE: chart.to_html() pins its own vega versions, use the ones
    # from the charts module instead.
    html = spec_to_html(
        chart.to_dict(),
        mode="vega-lite",
        vega_version=charts.VEGA_VERSION,
        vegalite_version=charts.VEGA_LITE_VERSION,
        vegaembed_version=charts.VEGA_EMBED_VERSION,
        base_url="https://unpkg.com",
    )
    return HTMLResponse(content=html)


@app.exception_handler(DataLoadError)
async def data_load_error_handler(request, exc: DataLoadError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": f"{LOAD_ERROR_MESSAGE} {exc}"},
    )


@app.exception_handler(NoDataError)
async def no_data_error_handler(request, exc: NoDataError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.get("/health")
def health():
    """Health check endpoint for cloud deployments."""
    return {"status": "ok"}


@app.get("/status")
def server_status():
    """Returns status information for the running server."""
    df = app.state.daily
    status = models.ServerStatus(
        current_time_utc=datetime.datetime.now(tz=datetime.timezone.utc),
        options=app.state.server_options,
        record_count=0 if df is None else len(df),
        load_error=app.state.load_error,
    )
    if df is not None and not df.empty:
        status.first_date = df.index.min().date()
        status.last_date = df.index.max().date()
    return status


@app.get("/metrics")
def get_metrics() -> list[models.MetricInfo]:
    """Metrics that can be toggled by the user, in legend order."""
    return [
        models.MetricInfo(
            id=m.id,
            label=m.label,
            category=m.category,
            shape=m.shape,
            units=m.units,
            color=m.color,
        )
        for m in catalog.legend_metrics()
    ]


@app.get("/selection")
def get_selection() -> models.SelectionView:
    return _selection_view()


@app.post("/selection/reset")
def reset_selection() -> models.SelectionView:
    app.state.selection.reset()
    return _selection_view()


@app.post("/selection/{metric_id}")
def toggle_metric(metric_id: str, visible: bool = True) -> models.SelectionView:
    """Toggles metric_id on or off.

    Unknown metrics and selections exceeding the chart's capacity
    leave the selection unchanged.
    """
    app.state.selection.toggle(metric_id, visible)
    return _selection_view()


@app.get("/chart")
def get_chart(request: Request, variant: str | None = None):
    variant = _variant(variant)
    df = _daily()

    state = app.state.selection.state
    chart = app.state.charts.get((variant, state))
    if chart is None:
        chart = charts.weather_chart(df, state, variant=variant)
        app.state.charts[(variant, state)] = chart

    if "text/html" in request.headers.get("accept", ""):
        return _render_html(chart)

    return JSONResponse(
        content={
            "vega_specs": {variant: chart.to_dict()},
        }
    )


@app.get("/data/daily")
def get_daily_data():
    return {"records": tf.records(_daily())}
