from fastapi import APIRouter, Request

from app.forms.configs import FORM_NAMES, get_form_config
from app.schemas.response import success_response

router = APIRouter(prefix="/forms", tags=["forms"])


@router.get("")
async def list_forms():
    return success_response({"forms": list(FORM_NAMES)})


@router.get("/{name}")
async def get_form(name: str, request: Request):
    """
    Form configuration for the web client, camelCase keys.
    """
    form = get_form_config(name, request.app.state.settings)
    return success_response(form.model_dump(by_alias=True, exclude_none=True, mode="json"))
