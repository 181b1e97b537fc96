"""Run the FRD Wizard service with uvicorn (`python -m frd_wizard`)."""

from __future__ import annotations

import os


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "frd_wizard.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
