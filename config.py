import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Generator defaults, overridable from the environment or a .env file."""

    # Output
    OUTPUT_DIR = os.environ.get('CNCGEN_OUTPUT_DIR', 'output')

    # Machine
    SAFE_Z = float(os.environ.get('CNCGEN_SAFE_Z', 1.0))  # mm above stock
    FEED = float(os.environ.get('CNCGEN_FEED', 300))      # mm/min
    RPM = float(os.environ.get('CNCGEN_RPM', 8000))
    TOOL = int(os.environ.get('CNCGEN_TOOL', 17))
    COOLANT = os.environ.get('CNCGEN_COOLANT', 'false').lower() in ('1', 'true', 'yes')

    # Logging
    LOG_LEVEL = os.environ.get('CNCGEN_LOG_LEVEL', 'WARNING').upper()
