import argparse
import json
import logging
import sys

from altair.utils import spec_to_html

from service.wxchart.base import logging_config as _  # configure logging

from service.wxchart.base.errors import DataLoadError, NoDataError
from service.wxchart.charts import charts
from service.wxchart.data import loader
from service.wxchart.data import transform as tf
from service.wxchart.env import DataSourceConfig
from service.wxchart.selection import toggle as tg
from service.wxchart.selection.state import EMPTY, SelectionState


logger = logging.getLogger("export")


def apply_selections(metric_ids: list[str]) -> SelectionState:
    """Selects the given metrics in order, skipping the ones that don't fit."""
    state = EMPTY
    for metric_id in metric_ids:
        new_state = tg.toggle(state, metric_id, True)
        if not new_state.is_visible(metric_id):
            logger.warning(
                "Cannot select %s (selected so far: %s)", metric_id, list(state.order)
            )
        state = new_state
    return state


def write_chart(chart: charts.AltairChart, output: str) -> None:
    spec = chart.to_dict()
    if output.endswith(".html"):
        content = spec_to_html(
            spec,
            mode="vega-lite",
            vega_version=charts.VEGA_VERSION,
            vegalite_version=charts.VEGA_LITE_VERSION,
            vegaembed_version=charts.VEGA_EMBED_VERSION,
            base_url="https://unpkg.com",
        )
    else:
        content = json.dumps(spec, indent=2)
    with open(output, "w", encoding="utf-8") as f:
        f.write(content)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Export the weather chart for a series selection.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        metavar="PATH",
        help="Directory containing the CSV files (defaults to $WXCHART_DATA_DIR).",
    )
    parser.add_argument(
        "--base-url",
        dest="base_url",
        metavar="URL",
        help="Base URL to fetch the CSV files from (defaults to $WXCHART_DATA_URL).",
    )
    parser.add_argument(
        "--select",
        dest="select",
        action="append",
        default=[],
        metavar="METRIC",
        help="Metric to select, e.g. temperature or windRange. Can be repeated; order matters.",
    )
    parser.add_argument(
        "--variant",
        choices=charts.VARIANTS,
        default=charts.VARIANT_PRIMARY,
        help="Chart variant to export.",
    )
    parser.add_argument(
        "--output",
        required=True,
        metavar="FILE",
        help="Output file. Writes HTML if it ends in .html, Vega-Lite JSON otherwise.",
    )

    args = parser.parse_args(argv)

    config = DataSourceConfig.from_env()
    if args.base_url:
        config.base_url = args.base_url
    elif args.data_dir:
        config.base_url = None
        config.data_dir = args.data_dir

    try:
        df = tf.daily_records(loader.load_all(config))
    except (DataLoadError, NoDataError) as e:
        logger.error("Failed to load weather data: %s", e)
        return 1

    state = apply_selections(args.select)
    logger.info("Exporting %s chart for %s to %s", args.variant, list(state.order), args.output)
    write_chart(charts.weather_chart(df, state, variant=args.variant), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
