"""FastAPI application package for the FRD Wizard service.

The service walks a user through a linear product questionnaire, stores the
answers and asks a language model to write a Functional Requirements
Document. Business logic lives in `frd_wizard/logic/` and route handlers in
`frd_wizard/routes/`.
"""

from __future__ import annotations

from frd_wizard.main import create_app

__all__ = ["create_app"]
