from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import BaseModel

from app.localization import Culture, LocalizedValue, StringLocalizer
from app.utils.yaml_io import to_yaml

router = APIRouter(prefix="/localization", tags=["localization"])


class LocalizedValueOut(BaseModel):
    """Public representation of a resolved resource string."""

    name: str
    value: str
    resource_not_found: bool = False

    @classmethod
    def from_value(cls, item: LocalizedValue) -> LocalizedValueOut:
        return cls(name=item.name, value=item.value, resource_not_found=item.resource_not_found)


def get_localizer(request: Request) -> StringLocalizer:
    """
    Dependency returning a localizer bound to the request's active culture.

    LocaleMiddleware sets request.state.culture; without it the engine default applies.
    """
    engine = request.app.state.localization
    culture: Culture = getattr(request.state, "culture", None) or engine.default_culture
    return engine.for_culture(culture)


@router.get("", response_model=str, summary="Localized greeting")
def greeting(localizer: StringLocalizer = Depends(get_localizer)) -> str:
    """Return the text of the ``hi`` resource for the active culture."""
    return str(localizer["hi"])


@router.get("/all", summary="All resources for the active culture")
def all_strings(
    fmt: str = Query("json", pattern="^(json|yaml)$"),
    localizer: StringLocalizer = Depends(get_localizer),
) -> Response:
    """
    Every key/text pair of the active culture's resource.

    * fmt=json → list of {name, value, resource_not_found}
    * fmt=yaml → flat YAML mapping key: text
    """
    items = localizer.get_all()
    if fmt == "yaml":
        body = to_yaml({item.name: item.value for item in items})
        return Response(content=body, media_type="application/x-yaml")

    payload = [LocalizedValueOut.from_value(item).model_dump() for item in items]
    return Response(
        content=json.dumps(payload, ensure_ascii=False),
        media_type="application/json",
    )


@router.get("/{name}", response_model=str, summary="Personalized welcome message")
def welcome(name: str, localizer: StringLocalizer = Depends(get_localizer)) -> str:
    """Return the ``welcome`` resource formatted with ``name``."""
    return str(localizer.get_formatted("welcome", name))
