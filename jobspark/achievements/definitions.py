from __future__ import annotations

from jobspark.achievements.types import Achievement, Requirement


def _one(type_, metric, value, operator='gte') -> tuple[Requirement, ...]:
    return (Requirement(type=type_, metric=metric, value=value, operator=operator),)


ACHIEVEMENTS: tuple[Achievement, ...] = (
    # --- Profile ---
    Achievement(
        id='profile-starter',
        name='Getting Started',
        description='Complete your basic profile information',
        icon='👤',
        category='profile',
        points=50,
        requirements=_one('completion', 'profile_basic_info', 1),
        rarity='common',
    ),
    Achievement(
        id='profile-complete',
        name='Profile Pro',
        description='Complete 100% of your profile',
        icon='⭐',
        category='profile',
        points=200,
        requirements=_one('score', 'profile_completion', 100),
        rarity='uncommon',
    ),
    Achievement(
        id='profile-perfectionist',
        name='Perfectionist',
        description='Maintain 100% profile completion for 30 days',
        icon='💎',
        category='profile',
        points=500,
        requirements=_one('streak', 'profile_completion_100', 30),
        rarity='epic',
    ),
    # --- CV ---
    Achievement(
        id='cv-first',
        name='CV Creator',
        description='Generate your first CV',
        icon='📄',
        category='cv',
        points=100,
        requirements=_one('count', 'cv_generated', 1),
        rarity='common',
    ),
    Achievement(
        id='cv-master',
        name='CV Master',
        description='Generate 5 different CVs',
        icon='📋',
        category='cv',
        points=300,
        requirements=_one('count', 'cv_generated', 5),
        rarity='rare',
    ),
    Achievement(
        id='cv-perfectionist',
        name='CV Perfectionist',
        description='Generate a CV with 95%+ completion score',
        icon='🏆',
        category='cv',
        points=250,
        requirements=_one('score', 'cv_completion_score', 95),
        rarity='uncommon',
    ),
    # --- Interview ---
    Achievement(
        id='interview-rookie',
        name='Interview Rookie',
        description='Complete your first interview practice',
        icon='🎤',
        category='interview',
        points=75,
        requirements=_one('count', 'interview_completed', 1),
        rarity='common',
    ),
    Achievement(
        id='interview-ready',
        name='Interview Ready',
        description='Complete 10 interview practice sessions',
        icon='🎯',
        category='interview',
        points=400,
        requirements=_one('count', 'interview_completed', 10),
        rarity='rare',
    ),
    Achievement(
        id='interview-ace',
        name='Interview Ace',
        description='Score 90%+ on an interview practice',
        icon='🌟',
        category='interview',
        points=300,
        requirements=_one('score', 'interview_best_score', 90),
        rarity='uncommon',
    ),
    Achievement(
        id='interview-legend',
        name='Interview Legend',
        description='Complete 50 interview sessions with 85%+ average score',
        icon='👑',
        category='interview',
        points=1000,
        requirements=(
            Requirement(type='count', metric='interview_completed', value=50),
            Requirement(type='score', metric='interview_average_score', value=85),
        ),
        rarity='legendary',
    ),
    # --- Jobs ---
    Achievement(
        id='job-hunter',
        name='Job Hunter',
        description='Apply to your first job',
        icon='🎯',
        category='jobs',
        points=100,
        requirements=_one('count', 'job_applied', 1),
        rarity='common',
    ),
    Achievement(
        id='job-seeker',
        name='Active Job Seeker',
        description='Apply to 10 jobs',
        icon='🔍',
        category='jobs',
        points=300,
        requirements=_one('count', 'job_applied', 10),
        rarity='uncommon',
    ),
    Achievement(
        id='job-magnet',
        name='Job Magnet',
        description='Apply to 5 jobs with 90%+ match score',
        icon='🧲',
        category='jobs',
        points=400,
        requirements=_one('count', 'high_match_applications', 5),
        rarity='rare',
    ),
    # --- Skills ---
    Achievement(
        id='skill-builder',
        name='Skill Builder',
        description='Add 5 skills to your profile',
        icon='🛠️',
        category='skills',
        points=75,
        requirements=_one('count', 'skills_added', 5),
        rarity='common',
    ),
    Achievement(
        id='skill-master',
        name='Skill Master',
        description='Add 20 skills across all categories',
        icon='🎓',
        category='skills',
        points=250,
        requirements=_one('count', 'skills_added', 20),
        rarity='uncommon',
    ),
    Achievement(
        id='polyglot',
        name='Polyglot',
        description='Add 3 or more languages',
        icon='🌍',
        category='skills',
        points=200,
        requirements=_one('count', 'languages_added', 3),
        rarity='uncommon',
    ),
    # --- Engagement ---
    Achievement(
        id='daily-user',
        name='Daily User',
        description='Use JobSpark for 7 consecutive days',
        icon='📅',
        category='engagement',
        points=150,
        requirements=_one('streak', 'daily_login', 7),
        rarity='common',
    ),
    Achievement(
        id='power-user',
        name='Power User',
        description='Use JobSpark for 30 consecutive days',
        icon='⚡',
        category='engagement',
        points=500,
        requirements=_one('streak', 'daily_login', 30),
        rarity='rare',
    ),
    Achievement(
        id='career-champion',
        name='Career Champion',
        description='Reach 1000 total points',
        icon='🏅',
        category='engagement',
        # Meta-achievement, worth nothing by itself
        points=0,
        requirements=_one('count', 'total_points', 1000),
        rarity='epic',
    ),
    # --- Hidden ---
    Achievement(
        id='early-bird',
        name='Early Bird',
        description='Complete a task before 6 AM',
        icon='🌅',
        category='engagement',
        points=100,
        requirements=_one('completion', 'early_morning_activity', 1),
        rarity='uncommon',
        hidden=True,
    ),
    Achievement(
        id='night-owl',
        name='Night Owl',
        description='Complete a task after 11 PM',
        icon='🦉',
        category='engagement',
        points=100,
        requirements=_one('completion', 'late_night_activity', 1),
        rarity='uncommon',
        hidden=True,
    ),
    Achievement(
        id='weekend-warrior',
        name='Weekend Warrior',
        description='Complete 10 activities on weekends',
        icon='⚔️',
        category='engagement',
        points=200,
        requirements=_one('count', 'weekend_activities', 10),
        rarity='rare',
        hidden=True,
    ),
)
