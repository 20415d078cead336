"""Model listing endpoint.

Exposes the selectable model identifiers and the configured default so
clients can build a model picker.
"""

from fastapi import APIRouter

from src.agent.config import AVAILABLE_MODELS, default_model
from src.models.schemas import ModelList, ModelOption

router = APIRouter(prefix="/api", tags=["models"])


@router.get("/models", response_model=ModelList)
async def list_models() -> ModelList:
    """List selectable models.

    The default is included even when it is not one of the listed
    identifiers, so a ``CHAT_MODEL`` override is always selectable.
    """
    options = [ModelOption(value=value, label=label) for value, label in AVAILABLE_MODELS]
    default = default_model()
    if default not in {o.value for o in options}:
        options.insert(0, ModelOption(value=default, label=default))

    return ModelList(models=options, default=default)
