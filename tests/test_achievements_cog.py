import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from jobspark.achievements.catalog import default_catalog
from jobspark.achievements.engine import AchievementsEngine
from jobspark.achievements.types import AchievementProgress
from jobspark.cogs.achievements_cog import (
    ERROR_MESSAGE,
    AchievementsCog,
    chunk_lines,
    format_entry,
    progress_bar,
)
from tests.conftest import RecordingNotifier, StaticMetrics, snapshot_with

CATALOG = default_catalog()


def test_progress_bar():
    assert progress_bar(0) == '▱' * 10
    assert progress_bar(0.45) == '▰' * 4 + '▱' * 6
    assert progress_bar(1.5) == '▰' * 10


def test_format_locked_entry():
    entry = AchievementProgress(
        achievement=CATALOG.by_id('cv-master'),
        earned=False,
        progress=2,
        max_progress=5,
    )
    text = format_entry(entry)
    assert text.startswith('🔒 **CV Master**')
    assert '(+300 pts)' in text
    assert text.endswith('2/5')


def test_format_earned_entry():
    achievement = CATALOG.by_id('polyglot')
    entry = AchievementProgress(
        achievement=achievement,
        earned=True,
        progress=1,
        max_progress=1,
        earned_at=datetime(2026, 2, 7, tzinfo=timezone.utc),
    )
    text = format_entry(entry)
    assert text.startswith(f'{achievement.icon} **Polyglot**')
    assert '2026-02-07' in text
    assert achievement.description in text


def test_chunk_lines_respects_limit():
    lines = ['x' * 40] * 10
    chunks = chunk_lines(lines, max_len=100)
    assert all(len(c) <= 100 for c in chunks)
    assert sum(c.count('x' * 40) for c in chunks) == 10


def test_chunk_lines_keeps_oversized_line():
    assert chunk_lines(['y' * 150], max_len=100) == ['y' * 150]
    assert chunk_lines([]) == []


class _BrokenStore:
    def for_user(self, user_id):
        raise RuntimeError('connection refused')

    def insert_if_absent(self, award):
        raise RuntimeError('connection refused')


def _interaction(user_id=42):
    interaction = MagicMock()
    interaction.user.id = user_id
    interaction.user.display_name = 'Ada'
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


def _cog(store, metrics=None):
    engine = AchievementsEngine(
        CATALOG, store, metrics or StaticMetrics(), RecordingNotifier()
    )
    return AchievementsCog(bot=MagicMock(), engine=engine)


def test_achievements_command_awards_and_renders(store):
    cog = _cog(store, StaticMetrics(snapshot_with(counters={'cv_generated': 1})))
    interaction = _interaction()

    asyncio.run(cog.achievements.callback(cog, interaction, None))

    interaction.response.defer.assert_awaited_once()
    embed = interaction.followup.send.await_args.kwargs['embed']
    assert embed.description == '1/19 unlocked • 100 points'
    assert embed.fields[0].name == 'Just unlocked'
    assert 'CV Creator' in embed.fields[0].value
    assert ('42', 'cv-first') in store.rows


def test_achievements_command_reports_failure():
    cog = _cog(_BrokenStore())
    interaction = _interaction()

    asyncio.run(cog.achievements.callback(cog, interaction, None))

    interaction.followup.send.assert_awaited_once_with(ERROR_MESSAGE, ephemeral=True)


def test_points_command(store):
    cog = _cog(store)
    cog.engine.ledger.record_points('42', 'polyglot', 200)
    interaction = _interaction()

    asyncio.run(cog.points.callback(cog, interaction))

    interaction.response.send_message.assert_awaited_once_with(
        'You have **200** achievement points.', ephemeral=True
    )


def test_points_command_reports_failure():
    cog = _cog(_BrokenStore())
    interaction = _interaction()

    asyncio.run(cog.points.callback(cog, interaction))

    interaction.response.send_message.assert_awaited_once_with(
        ERROR_MESSAGE, ephemeral=True
    )
