"""FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from formgate.config import FormgateConfig, configure_logging
from formgate.forms import FormDefinition, FormLoader, FormValueError, validate_forms_dir

logger = logging.getLogger(__name__)


# Global instances (initialized on startup)
form_loader: FormLoader | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load form definitions on startup."""
    global form_loader

    config = FormgateConfig.from_env(Path.cwd())
    configure_logging(config.log_level)

    # Validate form YAML files against the JSON Schema (warn on errors, don't block startup)
    schema_issues = validate_forms_dir(config.forms_path)
    for issue in schema_issues:
        if issue.severity == "error":
            logger.error("Form schema error: %s", issue)
        else:
            logger.warning("Form schema warning: %s", issue)
    if schema_issues:
        logger.warning(
            "Form validation reported %d issue(s). "
            "Run 'formgate form validate' for details.",
            len(schema_issues),
        )

    # Directive errors are programmer mistakes: fail startup loudly
    form_loader = FormLoader(config.forms_path)
    form_loader.load_all()
    logger.info("Loaded %d form(s) from %s", len(form_loader.list_forms()), config.forms_path)

    yield

    form_loader = None


app = FastAPI(title="formgate API", lifespan=lifespan)


class ValidateRequest(BaseModel):
    """Input values keyed by input name."""

    values: dict[str, Any] = Field(default_factory=dict)


def _get_form(name: str) -> FormDefinition:
    if not form_loader:
        raise HTTPException(500, "Form loader not initialized")
    definition = form_loader.get_form(name)
    if definition is None:
        raise HTTPException(404, f"Form '{name}' not found")
    return definition


# --- Form Endpoints ---


@app.get("/api/forms")
async def list_forms() -> dict[str, Any]:
    """List all available forms."""
    if not form_loader:
        raise HTTPException(500, "Form loader not initialized")

    forms = []
    for name in form_loader.list_forms():
        definition = form_loader.get_form(name)
        if definition:
            forms.append({
                "name": definition.name,
                "displayName": definition.display_name,
                "inputCount": len(definition.inputs),
            })

    return {"forms": forms}


@app.get("/api/forms/{form}")
async def get_form(form: str) -> dict[str, Any]:
    """Get a form definition with the parsed rules of every field."""
    definition = _get_form(form)
    instance = definition.build()

    data = definition.to_dict()
    data["fields"] = [
        {
            "name": field.name,
            "kind": field.kind.value,
            "rules": [rule.to_dict() for rule in field.rules],
        }
        for field in instance.registry
    ]
    return data


@app.post("/api/forms/{form}/validate")
async def validate_form(form: str, request: ValidateRequest) -> dict[str, Any]:
    """Fill in a fresh copy of the form and run a validation pass."""
    definition = _get_form(form)

    try:
        report = definition.build().fill(request.values)
    except FormValueError as e:
        raise HTTPException(422, str(e))

    return report.to_dict()
