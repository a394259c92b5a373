"""
Configuration for the drawtopology service and DXF interchange.

Values are module constants; the service ones can be overridden through
environment variables when the process starts.
"""

import os

# ---------------------------------------------------------------
# SERVICE
# ---------------------------------------------------------------

HOST = os.environ.get("DRAWTOPOLOGY_HOST", "0.0.0.0")
PORT = int(os.environ.get("DRAWTOPOLOGY_PORT", "8000"))
LOG_LEVEL = os.environ.get("DRAWTOPOLOGY_LOG_LEVEL", "INFO").upper()

SERVICE_NAME = "drawtopology"


# ---------------------------------------------------------------
# DXF INTERCHANGE
# ---------------------------------------------------------------

# R2000 is the oldest version with LWPOLYLINE support
DXF_VERSION = "R2000"

# Lines go to one layer per style, e.g. LINE_DOUBLE
LINE_LAYER_PREFIX = "LINE_"
WIRE_LAYER = "WIRE"
JUNCTION_LAYER = "JUNCTION"
WIRE_JUNCTION_LAYER = "WIRE_JUNCTION"

# Application id for the XDATA carrying a wire's net name
XDATA_APPID = "DRAWTOPOLOGY"

JUNCTION_RADIUS = 0.25
