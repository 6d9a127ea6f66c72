"""
Management command to load the Vaccine Lot Release competency framework.

Creates the proficiency levels, the VLR domain with its areas and items, the
combined assessment instrument, learning units, role target levels and a demo
organization/user set. Safe to run repeatedly.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import Organization, ParticipantProfile, UserProfile
from competencies import seed_data
from competencies.models import (
    AssessmentInstrument, AssessmentQuestion, CompetencyArea, CompetencyDomain,
    CompetencyItem, CompetencyLevel, RoleTargetLevel,
)
from curriculum.models import LearningUnit


class Command(BaseCommand):
    help = 'Seed the VLR competency framework, learning units and demo users'

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-users', action='store_true',
            help='Only load the framework, no demo organizations or users',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('Seeding VLR competency framework...'))

        levels = self.seed_levels()
        domain, areas = self.seed_domain()
        items = self.seed_items(areas, levels)
        question_count = self.seed_instrument(domain, items)
        unit_count = self.seed_learning_units(domain, areas, levels)
        target_count = self.seed_role_targets(levels)

        self.stdout.write(self.style.SUCCESS(
            f'✓ {len(levels)} levels, {len(areas)} areas, {len(items)} items, '
            f'{question_count} questions, {unit_count} learning units, {target_count} role targets'
        ))

        if not options['skip_users']:
            self.seed_users()

        self.stdout.write(self.style.SUCCESS('Seeding complete'))

    def seed_levels(self):
        levels = {}
        for data in seed_data.LEVELS:
            level, _ = CompetencyLevel.objects.update_or_create(
                level_number=data['level_number'],
                defaults={
                    'name': data['name'],
                    'description': data['description'],
                    'benchmark_score': data['benchmark_score'],
                },
            )
            levels[level.level_number] = level
        return levels

    def seed_domain(self):
        data = seed_data.DOMAIN
        domain, _ = CompetencyDomain.objects.update_or_create(
            code=data['code'],
            defaults={
                'name': data['name'],
                'description': data['description'],
                'framework_alignment': data['framework_alignment'],
                'is_active': True,
            },
        )

        areas = {}
        for index, (code, name, description) in enumerate(seed_data.AREAS, start=1):
            area, _ = CompetencyArea.objects.update_or_create(
                code=code,
                defaults={
                    'domain': domain,
                    'name': name,
                    'description': description,
                    'sort_order': index,
                    'weight': 1.0,
                },
            )
            areas[code] = area
        return domain, areas

    def seed_items(self, areas, levels):
        items = {}
        for index, (code, level_number, description) in enumerate(seed_data.ITEMS):
            area_code = code[:6]
            item, _ = CompetencyItem.objects.update_or_create(
                code=code,
                defaults={
                    'area': areas[area_code],
                    'level': levels[level_number],
                    'description': description,
                    'sort_order': index % 6 + 1,
                },
            )
            items[code] = item
        return items

    def seed_instrument(self, domain, items):
        data = seed_data.INSTRUMENT
        instrument, created = AssessmentInstrument.objects.get_or_create(
            domain=domain,
            name=data['name'],
            version=data['version'],
            defaults={'type': data['type'], 'is_active': True},
        )
        if not created and instrument.questions.exists():
            self.stdout.write(self.style.WARNING(f'Instrument "{instrument}" already has questions, skipping'))
            return instrument.questions.count()

        questions = []
        sort_order = 1
        for area_code, _, _ in seed_data.AREAS:
            area_items = [item for code, item in sorted(items.items()) if code.startswith(area_code)]
            for item in area_items[:seed_data.SELF_RATING_ITEMS_PER_AREA]:
                questions.append(AssessmentQuestion(
                    instrument=instrument,
                    competency_item=item,
                    question_type=AssessmentQuestion.SELF_RATING,
                    question_text=f'Rate your current proficiency in: {item.description}',
                    options=seed_data.SELF_RATING_OPTIONS,
                    correct_answer=None,
                    points=5,
                    difficulty_level=item.level.level_number,
                    sort_order=sort_order,
                ))
                sort_order += 1

        for data in seed_data.KNOWLEDGE_QUESTIONS:
            questions.append(AssessmentQuestion(
                instrument=instrument,
                competency_item=items[data['item_code']],
                question_type=AssessmentQuestion.MULTIPLE_CHOICE,
                question_text=data['question_text'],
                options=data['options'],
                correct_answer=data['correct_answer'],
                points=data['points'],
                difficulty_level=data['difficulty'],
                sort_order=sort_order,
                rationale=data['rationale'],
            ))
            sort_order += 1

        AssessmentQuestion.objects.bulk_create(questions)
        return len(questions)

    def seed_learning_units(self, domain, areas, levels):
        for data in seed_data.LEARNING_UNITS:
            unit, _ = LearningUnit.objects.update_or_create(
                code=data['code'],
                defaults={
                    'domain': domain,
                    'name': data['name'],
                    'description': data['description'],
                    'duration_hours': data['duration_hours'],
                    'delivery_methods': data['delivery_methods'],
                    'learning_outcomes': data['learning_outcomes'],
                    'level_appropriate': levels[data['level_number']],
                },
            )
            unit.competency_areas.set([areas[code] for code in data['area_codes']])
        return len(seed_data.LEARNING_UNITS)

    def seed_role_targets(self, levels):
        count = 0
        for role_type, targets in seed_data.ROLE_TARGETS.items():
            for area_code, level_number in targets.items():
                RoleTargetLevel.objects.update_or_create(
                    role_type=role_type,
                    area_code=area_code,
                    defaults={'level': levels[level_number]},
                )
                count += 1
        return count

    def seed_users(self):
        organizations = {}
        for data in seed_data.ORGANIZATIONS:
            organization, _ = Organization.objects.get_or_create(
                name=data['name'],
                defaults={'type': data['type'], 'country': data['country']},
            )
            organizations[data['key']] = organization

        for data in seed_data.USERS:
            user = UserProfile.objects.filter(email=data['email']).first()
            if user is not None:
                self.stdout.write(self.style.WARNING(f'User {user.email} already exists, skipping'))
                continue

            user = UserProfile(
                email=data['email'],
                first_name=data['first_name'],
                last_name=data['last_name'],
                role=data['role'],
                organization=organizations[data['organization']],
            )
            user.set_password(data['password'])
            user.save()

            profile = data.get('participant_profile')
            if profile:
                ParticipantProfile.objects.create(user=user, **profile)
            self.stdout.write(self.style.SUCCESS(f'✓ Created {user.role} {user.email}'))
