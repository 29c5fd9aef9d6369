# turnario/routes/profile.py
"""
Profile settings endpoints, with optional deferred saving.
"""

import logging

from fastapi import APIRouter, Depends

from turnario.core.constants import SHIFT_NAMES
from turnario.core.models import ProfileState
from turnario.core.schedule import build_pattern_text, cycle_start_warning, remaining_holidays
from turnario.core.storage import JsonProfileRepository, PendingChanges

from .shared import ProfileUpdate, commit_profile, current_profile, get_pending, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _profile_response(profile: ProfileState, pending: PendingChanges) -> dict:
    return {
        "profile": profile,
        "pending": pending.is_pending,
        "remaining_holidays": remaining_holidays(profile),
        "warning": cycle_start_warning(profile.cycle),
        "shift_names": list(SHIFT_NAMES),
    }


@router.get("")
def get_profile(
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Current profile, including a staged change that is not saved yet."""
    return _profile_response(current_profile(repository, pending), pending)


@router.put("")
def update_profile(
    update: ProfileUpdate,
    defer: bool = False,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """
    Update profile settings.

    With ``defer=true`` the change is only staged and written on the next
    flush, otherwise it is saved right away.
    """
    profile = current_profile(repository, pending)
    changes = update.model_dump(exclude_unset=True)
    names = changes.pop("pattern_shift_names", None)
    updated = ProfileState.model_validate({**profile.model_dump(), **changes})
    if names is not None:
        updated.shift_pattern = build_pattern_text(names, updated.shift_definitions)
        changes["shift_pattern"] = updated.shift_pattern

    if defer:
        pending.stage(updated)
        logger.info("Profile change staged: %s", ", ".join(sorted(changes)) or "no fields")
    else:
        commit_profile(updated, repository, pending)

    return _profile_response(updated, pending)


@router.post("/flush")
def flush_profile(
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Write the staged profile change, if any."""
    result = pending.flush(repository)
    return {"flushed": result is not None, "pending": pending.is_pending}


@router.delete("/pending")
def discard_pending(pending: PendingChanges = Depends(get_pending)):
    """Drop the staged profile change without saving it."""
    return {"discarded": pending.cancel(), "pending": pending.is_pending}
