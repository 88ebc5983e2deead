"""
Design writer module for exporting design records as JSON files.

Writes the request, response and project records of a design run to an
output directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .models import DesignRequest, DesignResponse, ProjectRecord


class DesignWriter:
    """Write design records to JSON files."""

    def __init__(self, output_dir: Union[str, Path], logger: Optional[logging.Logger] = None):
        """
        Initialize design writer.

        Args:
            output_dir: Directory the records are written to (created if missing)
            logger: Logger instance
        """
        self.output_dir = Path(output_dir)
        self.logger = logger or logging.getLogger(__name__)

    def write_json(self, filename: str, payload: Dict[str, Any]) -> bool:
        """
        Write one record to a JSON file.

        Args:
            filename: File name inside the output directory
            payload: JSON-serializable record

        Returns:
            True if successful, False otherwise
        """
        path = self.output_dir / filename
        self.logger.info(f"Writing {path}")

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            return True

        except (OSError, TypeError) as e:
            self.logger.error(f"Failed to write {path}: {e}")
            return False

    def write_design(
        self,
        request: DesignRequest,
        response: DesignResponse,
        project: Optional[ProjectRecord] = None
    ) -> Dict[str, bool]:
        """
        Write the records of one design run.

        Args:
            request: Design request record
            response: Design response record
            project: Optional project record

        Returns:
            Dictionary mapping file names to success status
        """
        records = {
            "design_request.json": request.to_dict(),
            "design_response.json": response.to_dict(),
        }
        if project is not None:
            records["project.json"] = project.to_dict()

        status = {name: self.write_json(name, payload) for name, payload in records.items()}

        successful = sum(1 for s in status.values() if s)
        self.logger.info(f"Design write complete: {successful}/{len(status)} successful")
        return status

    def log_write_summary(self, status: Dict[str, bool], response: DesignResponse) -> None:
        """
        Log summary of a design run and its written files.

        Args:
            status: Write status for each file
            response: Response record that was written
        """
        failed = [name for name, success in status.items() if not success]

        self.logger.info("=" * 60)
        self.logger.info("Design Summary")
        self.logger.info("=" * 60)
        self.logger.info(f"Water demand: {response.water_demand_l_day:,} L/day")
        self.logger.info(f"Total pipe length: {response.pipe_length_m} m")
        self.logger.info(f"Head loss: {response.head_loss_percent}%")
        self.logger.info(f"Zones: {response.zones['count']}")
        self.logger.info(f"Total cost: {response.total_cost:,.2f} THB")
        self.logger.info(f"Validation: {response.validation['status']}")
        self.logger.info(f"Output directory: {self.output_dir}")

        if failed:
            self.logger.warning("Failed files:")
            for name in failed:
                self.logger.warning(f"  - {name}")

        self.logger.info("=" * 60)
