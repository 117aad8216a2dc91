"""
Expose the FastAPI application instance.

Importing this module creates the application from the environment
configuration and registers all routes.  The service can be run with
Uvicorn directly or through the module entry point:

```sh
python -m codehelper.api
```
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
