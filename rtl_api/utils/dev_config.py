# ================================
# File: rtl_api/utils/dev_config.py
# ================================

import os

from rtl_core.kernel.b0f2_options import DEFAULT_OPTIONS, resolve_options


def dev_config():
    """Editor options for new documents; environment variables override the core defaults."""
    raw = dict(DEFAULT_OPTIONS)
    env = {
        "auto_detect": os.getenv("RTLSUPPORT_AUTO_DETECT"),
        "default_direction": os.getenv("RTLSUPPORT_DEFAULT_DIRECTION"),
        "types": os.getenv("RTLSUPPORT_TYPES"),
        "rtl_threshold": os.getenv("RTLSUPPORT_RTL_THRESHOLD"),
        "preserve_explicit": os.getenv("RTLSUPPORT_PRESERVE_EXPLICIT"),
    }
    raw.update({k: v for k, v in env.items() if v is not None and v != ""})
    return resolve_options({"options": raw})
