"""
Building curricula out of selected learning units
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from capacity.exceptions import BadRequest
from projects.models import Project
from ..models import Curriculum, CurriculumLearningUnit, CurriculumRecommendation, LearningUnit

logger = logging.getLogger(__name__)


class CurriculumService:

    @staticmethod
    @transaction.atomic
    def create(user, project_id, name, learning_unit_ids, description='', delivery_schedule=None):
        """
        Create a DRAFT curriculum with the units in the given order.

        Total hours is the sum of the unit durations. Any recommendation of
        the project for one of these units is marked ACCEPTED.
        """
        project = Project.objects.filter(id=project_id).first()
        if project is None:
            raise NotFound('Project not found')

        unit_ids = list(dict.fromkeys(learning_unit_ids))
        units = {unit.id: unit for unit in LearningUnit.objects.filter(id__in=unit_ids)}
        missing = [str(uid) for uid in unit_ids if uid not in units]
        if missing:
            raise BadRequest(f"Unknown learning unit(s): {', '.join(missing)}")

        curriculum = Curriculum.objects.create(
            project=project,
            name=name,
            description=description,
            total_hours=sum(unit.duration_hours for unit in units.values()),
            delivery_schedule=delivery_schedule or {},
            status=Curriculum.STATUS_DRAFT,
            created_by=user,
        )
        CurriculumLearningUnit.objects.bulk_create([
            CurriculumLearningUnit(curriculum=curriculum, learning_unit=units[uid], sort_order=index)
            for index, uid in enumerate(unit_ids)
        ])

        accepted = CurriculumRecommendation.objects.filter(
            project=project, learning_unit_id__in=unit_ids
        ).update(status=CurriculumRecommendation.STATUS_ACCEPTED)

        logger.info(
            "Curriculum %s created for project %s with %d units (%d recommendations accepted)",
            curriculum.id, project.id, len(unit_ids), accepted,
        )
        return curriculum

    @staticmethod
    def update(curriculum, user, data):
        for field in ('name', 'description', 'status', 'delivery_schedule'):
            if field in data:
                setattr(curriculum, field, data[field])
        if data.get('status') == Curriculum.STATUS_APPROVED:
            curriculum.approved_by = user
            logger.info("Curriculum %s approved by %s", curriculum.id, user.email)
        curriculum.save()
        return curriculum
