"""
Shared imports for copyholder.config.

The settings modules pull their stdlib and pydantic names from here so the
config package reads the same way throughout.
"""

import os  # noqa: F401
from datetime import timedelta  # noqa: F401
from pathlib import Path  # noqa: F401
from typing import Literal  # noqa: F401

from pydantic import Field  # noqa: F401
