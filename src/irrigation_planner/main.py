"""
Main entry point for the irrigation planner.

Reads a design input JSON file, runs the design engine and writes the
request/response records.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .core import Config, DateUtils, LoggerContext, constants, setup_logger
from .aggregator import DesignAggregator
from .designer import DesignEngine
from .models import DesignResponse
from .processing import InputNormalizer
from .site_context import SiteContextProvider
from .writer import DesignWriter


class IrrigationPlannerApp:
    """Main application for irrigation network design."""

    def __init__(self, config_file: Optional[str] = None, log_to_file: bool = True):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            log_to_file: Also write the log file
        """
        # Load configuration
        self.config = Config(config_file)

        # Setup logger
        self.logger = setup_logger(log_to_file=log_to_file)
        self.logger.info("=" * 60)
        self.logger.info("Irrigation Network Planner")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.date_utils: Optional[DateUtils] = None
        self.normalizer: Optional[InputNormalizer] = None
        self.engine: Optional[DesignEngine] = None
        self.aggregator: Optional[DesignAggregator] = None
        self.site_context: Optional[SiteContextProvider] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        settings = self.config.engine_settings()

        self.date_utils = DateUtils(self.config.timezone, logger=self.logger)
        self.normalizer = InputNormalizer(settings=settings, logger=self.logger)
        self.engine = DesignEngine(settings=settings, logger=self.logger)
        self.aggregator = DesignAggregator(date_utils=self.date_utils, logger=self.logger)
        self.site_context = SiteContextProvider(
            seed=self.config.site_context_seed,
            date_utils=self.date_utils,
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    @staticmethod
    def load_input(input_file: str) -> Dict[str, Any]:
        """
        Load a raw design input file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not hold a JSON object
        """
        with open(input_file, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"Design input must be a JSON object: {input_file}")
        return raw

    def run(
        self,
        input_file: Optional[str] = None,
        output_dir: Optional[str] = None,
        scenario: Optional[str] = None,
        raw_input: Optional[Dict[str, Any]] = None
    ) -> DesignResponse:
        """
        Run one design.

        Args:
            input_file: Path to a raw design input JSON file
            output_dir: Directory for the request/response records. Nothing is
                        written when None.
            scenario: Climate scenario for the seasonal simulation; overrides the
                      input's designOptions.scenario
            raw_input: Raw design input mapping, used instead of input_file

        Returns:
            DesignResponse of the run
        """
        try:
            self.initialize_components()

            if not all([
                self.date_utils,
                self.normalizer,
                self.engine,
                self.aggregator,
                self.site_context
            ]):
                raise RuntimeError("Components not properly initialized")

            if raw_input is None:
                if input_file is None:
                    self.logger.warning("No design input given, using defaults")
                    raw_input = {}
                else:
                    raw_input = self.load_input(input_file)

            options = raw_input.get("designOptions") or {}
            scenario = scenario or options.get("scenario") or raw_input.get("scenario")

            with LoggerContext(self.logger, "input normalization"):
                design_input = self.normalizer.normalize(raw_input)

            monthly_et0 = monthly_rainfall = None
            climate = raw_input.get("monthlyClimate")
            if isinstance(climate, dict):
                preset = constants.SCENARIO_PRESETS["normal"]
                monthly_et0 = self.normalizer.monthly_series(climate.get("et0"), preset["et0"])
                monthly_rainfall = self.normalizer.monthly_series(climate.get("rainfall"), preset["rainfall"])

            with LoggerContext(self.logger, "design calculation"):
                summary = self.engine.run(
                    design_input,
                    scenario=scenario,
                    monthly_et0=monthly_et0,
                    monthly_rainfall=monthly_rainfall
                )

            request = self.aggregator.build_request(
                design_input,
                boundary=raw_input.get("boundary"),
                scenario=scenario or "normal"
            )
            response = self.aggregator.build_response(
                summary,
                site_context=self.site_context.fetch() if raw_input.get("siteContext", True) else None
            )

            if output_dir is not None:
                project = self.aggregator.build_project_record(
                    summary,
                    project_id=raw_input.get("projectId"),
                    name=raw_input.get("projectName", "Untitled Project")
                )
                writer = DesignWriter(Path(output_dir), logger=self.logger)
                status = writer.write_design(request, response, project)
                writer.log_write_summary(status, response)
                if not all(status.values()):
                    raise RuntimeError(f"Failed to write design records to {output_dir}")

            self.logger.info("Processing complete")
            return response

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Irrigation Network Planner"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Path to design input JSON. Default: built-in defaults"
    )
    parser.add_argument(
        "--output",
        type=str,
        default="output",
        help="Directory for design_request.json and design_response.json"
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        choices=sorted(constants.SCENARIO_PRESETS),
        help="Climate scenario for the seasonal simulation"
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only"
    )

    args = parser.parse_args()

    # Run application
    try:
        app = IrrigationPlannerApp(config_file=args.config, log_to_file=not args.no_log_file)
        app.run(input_file=args.input, output_dir=args.output, scenario=args.scenario)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
