"""Persistence layer for youth profiles and their sections."""

from __future__ import annotations

from sqlalchemy.orm import Session

from dypse_api.domain.entities import (
    Education,
    JobStatus,
    UserSkill,
    WorkExperience,
    YouthProfile,
)
from dypse_api.infrastructure.models import (
    EducationModel,
    UserSkillModel,
    WorkExperienceModel,
    YouthProfileModel,
)
from dypse_api.utils import ensure_app_timezone

_PROFILE_FIELDS = ("bio", "location", "profile_picture_url", "cv_url")


class ProfileRepository:
    """Provide CRUD operations for :class:`YouthProfile` aggregates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user_id(self, user_id: int) -> YouthProfile | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def get_or_create(self, user_id: int) -> YouthProfile:
        model = self._get_model(user_id)
        if model is None:
            model = YouthProfileModel(user_id=user_id, job_status=JobStatus.UNEMPLOYED.value)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def update(self, profile: YouthProfile) -> YouthProfile:
        model = self._get_model(profile.user_id)
        if model is None:
            msg = f"Profile for user {profile.user_id} not found"
            raise ValueError(msg)
        for name in _PROFILE_FIELDS:
            setattr(model, name, getattr(profile, name))
        model.job_status = JobStatus(profile.job_status).value
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def add_experience(self, profile_id: int, experience: WorkExperience) -> WorkExperience:
        model = WorkExperienceModel(profile_id=profile_id)
        self._apply_experience(model, experience)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._experience_to_entity(model)

    def get_experience(self, profile_id: int, experience_id: int) -> WorkExperience | None:
        model = self._get_experience_model(profile_id, experience_id)
        return self._experience_to_entity(model) if model else None

    def update_experience(self, experience: WorkExperience) -> WorkExperience:
        model = self._get_experience_model(experience.profile_id, experience.id)
        if model is None:
            msg = f"Experience with id {experience.id} not found"
            raise ValueError(msg)
        self._apply_experience(model, experience)
        self.session.commit()
        self.session.refresh(model)
        return self._experience_to_entity(model)

    def delete_experience(self, profile_id: int, experience_id: int) -> bool:
        model = self._get_experience_model(profile_id, experience_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def add_education(self, profile_id: int, education: Education) -> Education:
        model = EducationModel(profile_id=profile_id)
        self._apply_education(model, education)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._education_to_entity(model)

    def get_education(self, profile_id: int, education_id: int) -> Education | None:
        model = self._get_education_model(profile_id, education_id)
        return self._education_to_entity(model) if model else None

    def update_education(self, education: Education) -> Education:
        model = self._get_education_model(education.profile_id, education.id)
        if model is None:
            msg = f"Education with id {education.id} not found"
            raise ValueError(msg)
        self._apply_education(model, education)
        self.session.commit()
        self.session.refresh(model)
        return self._education_to_entity(model)

    def delete_education(self, profile_id: int, education_id: int) -> bool:
        model = self._get_education_model(profile_id, education_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, user_id: int) -> YouthProfileModel | None:
        return (
            self.session.query(YouthProfileModel)
            .filter(YouthProfileModel.user_id == user_id)
            .first()
        )

    def _get_experience_model(
        self, profile_id: int | None, experience_id: int | None
    ) -> WorkExperienceModel | None:
        return (
            self.session.query(WorkExperienceModel)
            .filter(WorkExperienceModel.id == experience_id)
            .filter(WorkExperienceModel.profile_id == profile_id)
            .first()
        )

    def _get_education_model(
        self, profile_id: int | None, education_id: int | None
    ) -> EducationModel | None:
        return (
            self.session.query(EducationModel)
            .filter(EducationModel.id == education_id)
            .filter(EducationModel.profile_id == profile_id)
            .first()
        )

    def _list_skills(self, user_id: int) -> list[UserSkill]:
        models = (
            self.session.query(UserSkillModel)
            .filter(UserSkillModel.user_id == user_id)
            .order_by(UserSkillModel.id)
            .all()
        )
        return [
            UserSkill(skill_id=model.skill_id, skill_name=model.skill.name, level=model.level)
            for model in models
        ]

    @staticmethod
    def _apply_experience(model: WorkExperienceModel, experience: WorkExperience) -> None:
        model.role = experience.role
        model.company = experience.company
        model.location = experience.location
        model.start_date = experience.start_date
        model.end_date = experience.end_date
        model.is_current = experience.is_current
        model.description = experience.description

    @staticmethod
    def _apply_education(model: EducationModel, education: Education) -> None:
        model.institution = education.institution
        model.degree = education.degree
        model.field_of_study = education.field_of_study
        model.start_date = education.start_date
        model.end_date = education.end_date
        model.is_current = education.is_current

    @staticmethod
    def _experience_to_entity(model: WorkExperienceModel) -> WorkExperience:
        return WorkExperience(
            id=model.id,
            profile_id=model.profile_id,
            role=model.role,
            company=model.company,
            location=model.location,
            start_date=model.start_date,
            end_date=model.end_date,
            is_current=bool(model.is_current),
            description=model.description,
        )

    @staticmethod
    def _education_to_entity(model: EducationModel) -> Education:
        return Education(
            id=model.id,
            profile_id=model.profile_id,
            institution=model.institution,
            degree=model.degree,
            field_of_study=model.field_of_study,
            start_date=model.start_date,
            end_date=model.end_date,
            is_current=bool(model.is_current),
        )

    def _to_entity(self, model: YouthProfileModel) -> YouthProfile:
        return YouthProfile(
            id=model.id,
            user_id=model.user_id,
            bio=model.bio,
            location=model.location,
            job_status=JobStatus(model.job_status),
            profile_picture_url=model.profile_picture_url,
            cv_url=model.cv_url,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            experience=[self._experience_to_entity(item) for item in model.experience],
            education=[self._education_to_entity(item) for item in model.education],
            skills=self._list_skills(model.user_id),
        )


__all__ = ["ProfileRepository"]
