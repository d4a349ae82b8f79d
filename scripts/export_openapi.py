"""Write the service's OpenAPI schema to docs/openapi.json.

The schema routes are only mounted outside production, so the document is
built from the route table directly.
"""

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from pantry_chef.main import app


openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
with output.open("w") as f:
    json.dump(openapi_schema, f, indent=2)
