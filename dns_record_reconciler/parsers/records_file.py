import logging
from typing import Dict, List, Optional

import yaml

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class RecordsFileParser:
    """
    Reads record declarations from a YAML file.

    The file holds either a list of declarations or a mapping with a
    ``records`` list and an optional default ``zone_id``::

        zone_id: Z0123456789ABC
        records:
          - name: app.example.com
            type: A
            ttl: 300
            value: [10.0.0.1, 10.0.0.2]
    """

    def __init__(self, records_path: str):
        self.records_path = records_path
        self.zone_id: Optional[str] = None

    def parse(self) -> List[Dict]:
        """Parse the YAML file and return the raw record declarations."""
        try:
            with open(self.records_path, "r") as f:
                content = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Records file not found: {self.records_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing records file: {e}")

        if content is None:
            content = []

        if isinstance(content, dict):
            self.zone_id = content.get("zone_id")
            records = content.get("records") or []
        else:
            records = content

        if not isinstance(records, list):
            raise ConfigurationError("Records file must contain a list of records")

        for index, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                raise ConfigurationError(f"Record #{index} is not a mapping")

        logger.info(f"Successfully parsed {len(records)} records from {self.records_path}")
        return records
