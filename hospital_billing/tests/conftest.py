import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1].parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_runtest_setup():
    # Rebuild the default registry per test so alias-dir overrides don't leak
    try:
        from hospital_billing import engine

        engine.default_registry.cache_clear()
    except Exception:
        pass
