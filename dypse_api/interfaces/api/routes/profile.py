"""Routes for the authenticated youth's own profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from dypse_api.application.use_cases import profile as profile_uc
from dypse_api.domain.entities import ROLE_YOUTH, Education, User, WorkExperience
from dypse_api.infrastructure.database import get_db
from dypse_api.interfaces.api.dependencies import require_role
from dypse_api.interfaces.api.schemas import (
    EducationCreate,
    EducationRead,
    EducationUpdate,
    ExperienceCreate,
    ExperienceRead,
    ExperienceUpdate,
    ProfileRead,
    ProfileUpdate,
    SkillCreate,
    SkillRead,
)

router = APIRouter(prefix="/profile", tags=["profile"])

require_youth = require_role(ROLE_YOUTH)


def _bad_request(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _not_found(exc: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/me", response_model=ProfileRead)
def read_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ProfileRead:
    profile = profile_uc.get_profile(db, user_id=current_user.id)
    return ProfileRead.model_validate(profile)


@router.put("/me", response_model=ProfileRead)
def update_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ProfileRead:
    """Update the submitted account and profile fields."""

    changes = payload.model_dump(exclude_unset=True)
    try:
        profile = profile_uc.update_profile(db, user=current_user, changes=changes)
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return ProfileRead.model_validate(profile)


@router.post("/skills", response_model=SkillRead, status_code=status.HTTP_201_CREATED)
def add_skill(
    payload: SkillCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> SkillRead:
    try:
        skill = profile_uc.add_skill(
            db, user_id=current_user.id, name=payload.name, level=payload.level
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return SkillRead.model_validate(skill)


@router.delete("/skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> Response:
    try:
        profile_uc.remove_skill(db, user_id=current_user.id, skill_id=skill_id)
    except LookupError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/experience", response_model=ExperienceRead, status_code=status.HTTP_201_CREATED
)
def add_experience(
    payload: ExperienceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ExperienceRead:
    experience = WorkExperience(id=None, profile_id=None, **payload.model_dump())
    saved = profile_uc.add_experience(db, user_id=current_user.id, experience=experience)
    return ExperienceRead.model_validate(saved)


@router.put("/experience/{experience_id}", response_model=ExperienceRead)
def update_experience(
    experience_id: int,
    payload: ExperienceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ExperienceRead:
    try:
        saved = profile_uc.update_experience(
            db,
            user_id=current_user.id,
            experience_id=experience_id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except LookupError as exc:
        raise _not_found(exc) from exc
    return ExperienceRead.model_validate(saved)


@router.delete("/experience/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_experience(
    experience_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> Response:
    try:
        profile_uc.delete_experience(db, user_id=current_user.id, experience_id=experience_id)
    except LookupError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/education", response_model=EducationRead, status_code=status.HTTP_201_CREATED
)
def add_education(
    payload: EducationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> EducationRead:
    education = Education(id=None, profile_id=None, **payload.model_dump())
    saved = profile_uc.add_education(db, user_id=current_user.id, education=education)
    return EducationRead.model_validate(saved)


@router.put("/education/{education_id}", response_model=EducationRead)
def update_education(
    education_id: int,
    payload: EducationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> EducationRead:
    try:
        saved = profile_uc.update_education(
            db,
            user_id=current_user.id,
            education_id=education_id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except LookupError as exc:
        raise _not_found(exc) from exc
    return EducationRead.model_validate(saved)


@router.delete("/education/{education_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_education(
    education_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> Response:
    try:
        profile_uc.delete_education(db, user_id=current_user.id, education_id=education_id)
    except LookupError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/picture", response_model=ProfileRead)
async def upload_profile_picture(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ProfileRead:
    """Replace the profile picture with the uploaded image."""

    data = await file.read()
    try:
        profile = profile_uc.upload_profile_picture(
            db, user_id=current_user.id, filename=file.filename or "", data=data
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return ProfileRead.model_validate(profile)


@router.post("/cv", response_model=ProfileRead)
async def upload_cv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_youth),
) -> ProfileRead:
    """Replace the stored CV with the uploaded document."""

    data = await file.read()
    try:
        profile = profile_uc.upload_cv(
            db, user_id=current_user.id, filename=file.filename or "", data=data
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return ProfileRead.model_validate(profile)


__all__ = ["router"]
