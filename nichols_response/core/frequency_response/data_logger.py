"""
Nichols Response Data Logger

Persistence for named Nichols-form frequency responses:

- JSON storage with metadata (timestamp, format version, custom entries)
- Integrity verification via per-response checksums
- CSV export (one file per response) for external analysis tools

Data Schema
-----------
The JSON output follows a hierarchical structure:

{
    "metadata": {
        "timestamp": "2026-10-19T12:00:00",
        "version": "1.0.0",
        "config": { ... },
        "checksums": { ... }
    },
    "responses": {
        "plant": {
            "frequency_rad": [...],
            "phase_deg": [...],
            "magnitude_db": [...]
        },
        ...
    }
}

Magnitudes of -inf dB (zero-gain samples) are written as the JSON token
``-Infinity``, which ``json.load`` reads back unchanged.
"""

import os
import json
import hashlib
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any, Union

import numpy as np
import pandas as pd

from .exceptions import InvalidArgumentError
from .nichols_response import NicholsResponse


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy arrays."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


@dataclass
class LoggerConfig:
    """
    Configuration for the response data logger.

    Attributes
    ----------
    output_dir : Path
        Directory for saved data files
    base_filename : str
        Base name for output files
    save_json : bool
        Save JSON format
    save_csv : bool
        Save one CSV file per response
    include_checksums : bool
        Add integrity checksums to metadata
    pretty_print : bool
        Format JSON with indentation
    version : str
        Data format version string
    verbose : bool
        Print saved file paths
    """
    output_dir: Path = field(default_factory=lambda: Path('nichols_response_data'))
    base_filename: str = 'nichols_response'
    save_json: bool = True
    save_csv: bool = True
    include_checksums: bool = True
    pretty_print: bool = True
    version: str = '1.0.0'
    verbose: bool = True


def response_checksum(frequency: np.ndarray, phase_deg: np.ndarray,
                      magnitude_db: np.ndarray) -> str:
    """md5 digest over the frequency, phase and magnitude arrays."""
    combined = np.concatenate([
        np.asarray(frequency, dtype=float),
        np.asarray(phase_deg, dtype=float),
        np.asarray(magnitude_db, dtype=float)
    ])
    # Stable bytes for NaN/inf entries
    combined = np.nan_to_num(combined, nan=0.0, posinf=np.finfo(float).max,
                             neginf=-np.finfo(float).max)
    return hashlib.md5(combined.tobytes()).hexdigest()


class NicholsResponseLogger:
    """
    Data logger for Nichols-form frequency responses.

    Example Usage
    -------------
    >>> logger = NicholsResponseLogger(LoggerConfig(output_dir=Path('data')))
    >>> logger.add_response('plant', P)
    >>> logger.add_response('loop', P.series(C))
    >>> logger.set_config(NicholsConfig())
    >>> paths = logger.save()
    >>> responses = NicholsResponseLogger.load_responses(paths['json'])

    Parameters
    ----------
    config : LoggerConfig, optional
        Logger configuration
    """

    def __init__(self, config: Optional[LoggerConfig] = None):
        self.config = config or LoggerConfig()
        self._responses: Dict[str, NicholsResponse] = {}
        self._analysis_config: Optional[Dict] = None
        self._custom_metadata: Dict[str, Any] = {}
        self._start_time = datetime.now()

    @property
    def responses(self) -> Dict[str, NicholsResponse]:
        return dict(self._responses)

    def add_response(self, name: str, response: NicholsResponse) -> None:
        """
        Add a named response.

        Parameters
        ----------
        name : str
            Identifier, also used in CSV file names; must not contain a
            path separator
        response : NicholsResponse
            Frequency response data
        """
        if not isinstance(response, NicholsResponse):
            raise InvalidArgumentError(
                f"expected a NicholsResponse for '{name}', got {type(response).__name__}"
            )
        if not name:
            raise InvalidArgumentError("response name must be a non-empty string")
        if any(sep in name for sep in (os.sep, os.altsep, "/") if sep):
            raise InvalidArgumentError(
                f"response name '{name}' must not contain a path separator"
            )
        self._responses[name] = response

    def add_responses_dict(self, responses: Dict[str, NicholsResponse]) -> None:
        """Add multiple named responses at once."""
        for name, response in responses.items():
            self.add_response(name, response)

    def set_config(self, config: Any) -> None:
        """
        Record the analysis configuration for reproducibility tracking.

        Parameters
        ----------
        config : Any
            Configuration (dataclass or dict)
        """
        if hasattr(config, '__dataclass_fields__'):
            self._analysis_config = asdict(config)
        elif isinstance(config, dict):
            self._analysis_config = config
        else:
            self._analysis_config = {'raw': str(config)}

    def add_metadata(self, key: str, value: Any) -> None:
        """Add a custom (JSON-serializable) metadata entry."""
        self._custom_metadata[key] = value

    def save(self, suffix: Optional[str] = None) -> Dict[str, Any]:
        """
        Save all responses to disk.

        Parameters
        ----------
        suffix : str, optional
            Optional suffix for filename

        Returns
        -------
        Dict[str, Any]
            'json' -> Path and/or 'csv' -> List[Path]
        """
        saved_files = {}

        self.config.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = self._start_time.strftime('%Y%m%d_%H%M%S')
        base = f"{self.config.base_filename}_{timestamp}"
        if suffix:
            base = f"{base}_{suffix}"

        if self.config.save_json:
            json_path = self.config.output_dir / f"{base}.json"
            self._save_json(self._build_data_structure(), json_path)
            saved_files['json'] = json_path

        if self.config.save_csv:
            saved_files['csv'] = self._save_csv(base)

        return saved_files

    def _build_data_structure(self) -> Dict[str, Any]:
        """Build complete data structure for serialization."""
        return {
            'metadata': self._build_metadata(),
            'responses': {
                name: response.to_dict() for name, response in self._responses.items()
            }
        }

    def _build_metadata(self) -> Dict[str, Any]:
        metadata = {
            'timestamp': self._start_time.isoformat(),
            'version': self.config.version,
        }

        if self._analysis_config:
            metadata['config'] = self._analysis_config

        if self._custom_metadata:
            metadata['custom'] = self._custom_metadata

        if self.config.include_checksums:
            metadata['checksums'] = {
                name: response_checksum(r.frequency, r.phase_deg, r.magnitude_db)
                for name, r in self._responses.items()
            }

        return metadata

    def _save_json(self, data: Dict, filepath: Path) -> None:
        indent = 2 if self.config.pretty_print else None

        with open(filepath, 'w') as f:
            json.dump(data, f, cls=NumpyEncoder, indent=indent)

        if self.config.verbose:
            print(f"  [JSON] Saved: {filepath}")

    def _save_csv(self, base: str) -> List[Path]:
        csv_paths = []

        for name, response in self._responses.items():
            filepath = self.config.output_dir / f"{base}_{name}.csv"
            response.to_dataframe().to_csv(filepath, index=False)
            csv_paths.append(filepath)
            if self.config.verbose:
                print(f"  [CSV] Saved: {filepath}")

        return csv_paths

    @staticmethod
    def load_json(filepath: Union[str, Path]) -> Dict[str, Any]:
        """Load the raw data structure from a JSON file."""
        with open(filepath, 'r') as f:
            return json.load(f)

    @staticmethod
    def load_responses(filepath: Union[str, Path]) -> Dict[str, NicholsResponse]:
        """
        Load all responses from a JSON file.

        Returns
        -------
        Dict[str, NicholsResponse]
            Responses keyed by name, in file order
        """
        data = NicholsResponseLogger.load_json(filepath)
        return {
            name: NicholsResponse.from_dict(entry)
            for name, entry in data.get('responses', {}).items()
        }

    @staticmethod
    def load_csv(filepath: Union[str, Path]) -> NicholsResponse:
        """Load a single response from a CSV file written by ``save``."""
        frame = pd.read_csv(filepath)
        return NicholsResponse.from_dict({
            column: frame[column].to_numpy()
            for column in ('frequency_rad', 'phase_deg', 'magnitude_db')
            if column in frame.columns
        })

    @staticmethod
    def verify_checksum(filepath: Union[str, Path]) -> bool:
        """
        Verify data integrity using stored checksums.

        Returns
        -------
        bool
            True if all checksums match (or none are stored)
        """
        data = NicholsResponseLogger.load_json(filepath)
        stored_checksums = data.get('metadata', {}).get('checksums')

        if stored_checksums is None:
            print("No checksums found in file")
            return True

        for name, entry in data.get('responses', {}).items():
            computed = response_checksum(
                entry['frequency_rad'], entry['phase_deg'], entry['magnitude_db']
            )
            stored = stored_checksums.get(name, '')
            if computed != stored:
                print(f"Checksum mismatch for {name}: {computed} != {stored}")
                return False

        print("All checksums verified successfully")
        return True
