# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TIMEOUT_SECONDS = 30.0

ENV_BASE_URL = "RESO_BASE_URL"
ENV_TOKEN = "RESO_TOKEN"
ENV_DATASET_ID = "RESO_DATASET_ID"
ENV_TIMEOUT = "RESO_TIMEOUT"


@dataclass(frozen=True)
class ResoConfig:
    """
    Configuration settings for RESO client operations.

    :param dataset_id: Dataset identifier inserted between the base URL and the
        resource path (``{base_url}/{dataset_id}/Property``). Some servers require it.
    :type dataset_id: str or None
    :param http_timeout: Request timeout in seconds (default: 30).
    :type http_timeout: float or None
    :param logger_name: Name of the :mod:`logging` logger used for request logs.
    :type logger_name: str
    """

    dataset_id: Optional[str] = None
    http_timeout: Optional[float] = None
    logger_name: str = "reso_client"

    @classmethod
    def from_env(cls) -> "ResoConfig":
        """
        Create a configuration from ``RESO_DATASET_ID`` and ``RESO_TIMEOUT``.

        Both variables are optional. A timeout that is not an integer number of
        seconds falls back to the default.

        :return: Configuration instance.
        :rtype: ~reso_client.core.config.ResoConfig
        """
        dataset_id = os.environ.get(ENV_DATASET_ID) or None
        timeout: Optional[float] = None
        raw_timeout = os.environ.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(int(raw_timeout.strip()))
            except ValueError:
                timeout = None
        return cls(dataset_id=dataset_id, http_timeout=timeout)
