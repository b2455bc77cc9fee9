import copy
import os
import sys
from pathlib import Path

import pytest

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ELEMENTS_BACKEND", "memory")
os.environ.setdefault("ELEMENTS_RECENT_DAYS", "7")

from content_engines.element_store import routes as element_routes  # noqa: E402
from content_engines.logging import audit  # noqa: E402

_VALID_CANDIDATES = {
    "statistics": {
        "title": "Proyectos entregados",
        "description": "Obras concluidas desde 2005",
        "value": 150,
        "suffix": "+",
        "label": "Proyectos",
        "icon": "Award",
        "enabled": True,
    },
    "pillars": {
        "title": "Seguridad",
        "description": "Cero accidentes como meta permanente",
        "icon": "ShieldCheck",
        "image": "/images/pillars/seguridad.jpg",
        "image_fallback": "https://cdn.example.com/pillars/seguridad.jpg",
    },
    "policies": {
        "title": "Política de calidad",
        "description": "Cumplimos ISO 9001 en todos los proyectos",
        "icon": "BadgeCheck",
        "image": "",
        "image_fallback": "",
    },
    "services": {
        "title": "Gerencia de proyectos",
        "description": "Dirección integral de obras",
        "image_url": "https://cdn.example.com/services/gerencia.jpg",
        "image_url_fallback": "/images/services/gerencia.jpg",
        "icon_url": "/icons/gerencia.svg",
        "cta": {"text": "Conocer más", "url": "/servicios/gerencia"},
    },
    "projects": {
        "name": "Plaza Norte",
        "title": "Centro Comercial Plaza Norte",
        "description": "Ampliación del centro comercial",
        "type": "Comercial",
        "image_url": "/images/projects/plaza-norte.jpg",
        "image_url_fallback": "",
    },
}


@pytest.fixture
def valid_candidate():
    def _make(kind, **overrides):
        data = copy.deepcopy(_VALID_CANDIDATES[str(getattr(kind, "value", kind))])
        data.update(overrides)
        return data

    return _make


@pytest.fixture(autouse=True)
def _isolate_module_state():
    events = []
    audit.set_audit_logger(lambda event: events.append(event) or {"status": "accepted"})
    element_routes.reset_backend_stores()
    yield events
    audit.reset_audit_logger()
    element_routes.reset_backend_stores()


@pytest.fixture
def audit_events(_isolate_module_state):
    return _isolate_module_state
