CATALOG_VERSION = '2025.1'

# Applications at or above this match score count as high-match
HIGH_MATCH_SCORE = 90

# Event hours (UTC) for the hidden time-of-day achievements
EARLY_MORNING_HOUR = 6
LATE_NIGHT_HOUR = 23

# Days of session history handed to the streak calculator; longer streaks cap here
LOGIN_STREAK_LOOKBACK_DAYS = 400

# Event types written by the analytics collector
EVENT_CV_GENERATED = 'cv_generated'
EVENT_INTERVIEW_COMPLETED = 'interview_completed'
EVENT_JOB_APPLIED = 'job_applied'

NOTIFICATION_TITLE = 'Achievement Unlocked! 🏆'

CATEGORIES = ('profile', 'cv', 'interview', 'jobs', 'skills', 'engagement')
RARITIES = ('common', 'uncommon', 'rare', 'epic', 'legendary')
REQUIREMENT_TYPES = ('count', 'score', 'streak', 'time', 'completion')
OPERATORS = ('gte', 'lte', 'eq', 'gt', 'lt')

RARITY_ICONS = {
    'common': '⚪',
    'uncommon': '🟢',
    'rare': '🔵',
    'epic': '🟣',
    'legendary': '🟠',
}
