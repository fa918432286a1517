import asyncio
import logging

import discord
from discord import Interaction, app_commands
from discord.ext import commands

from jobspark.achievements.engine import AchievementsEngine
from jobspark.achievements.types import Achievement, AchievementProgress
from jobspark.services.achievements import create_engine
from jobspark.utils.constants import RARITY_ICONS

logger = logging.getLogger(__name__)

# Discord rejects embed field values over 1024 characters
FIELD_LIMIT = 900

ERROR_MESSAGE = (
    '❌ Could not load your achievements right now. Please try again later.'
)


def progress_bar(ratio: float, width: int = 10) -> str:
    filled = max(0, min(width, int(ratio * width)))
    return '▰' * filled + '▱' * (width - filled)


def format_entry(entry: AchievementProgress) -> str:
    a = entry.achievement
    rarity = RARITY_ICONS.get(a.rarity, '')
    if entry.earned:
        when = (
            f' • {entry.earned_at.date().isoformat()}' if entry.earned_at else ''
        )
        return (
            f'{a.icon} **{a.name}** {rarity} (+{a.points} pts){when}\n'
            f'_{a.description}_'
        )
    return (
        f'🔒 **{a.name}** {rarity} (+{a.points} pts)\n'
        f'{progress_bar(entry.ratio)} {entry.progress:g}/{entry.max_progress:g}'
    )


def chunk_lines(lines: list[str], max_len: int = FIELD_LIMIT) -> list[str]:
    chunks: list[str] = []
    cur: list[str] = []
    cur_len = 0
    for ln in lines:
        add_len = len(ln) + 1
        if cur_len + add_len > max_len and cur:
            chunks.append('\n'.join(cur))
            cur = []
            cur_len = 0
        cur.append(ln)
        cur_len += add_len
    if cur:
        chunks.append('\n'.join(cur))
    return chunks


def add_section(
    embed: discord.Embed, title: str, lines: list[str], empty: str
) -> None:
    if not lines:
        embed.add_field(name=title, value=empty, inline=False)
        return
    for idx, block in enumerate(chunk_lines(lines), start=1):
        embed.add_field(
            name=(title if idx == 1 else f'{title} (cont.)'),
            value=block,
            inline=False,
        )


class AchievementsCog(commands.Cog):
    def __init__(self, bot: commands.Bot, engine: AchievementsEngine | None = None):
        self.bot = bot
        self.engine = engine or create_engine()

    def _load_view(
        self, user_id: str
    ) -> tuple[list[Achievement], list[AchievementProgress], int]:
        # Runs off the event loop; every engine call hits Postgres
        newly_earned = self.engine.check_and_award(user_id)
        report = self.engine.progress_report(user_id)
        return newly_earned, report, self.engine.total_points(user_id)

    @app_commands.command(name='achievements', description='View your achievements')
    @app_commands.choices(
        show=[
            app_commands.Choice(name='Earned', value='earned'),
            app_commands.Choice(name='Locked', value='locked'),
            app_commands.Choice(name='All', value='all'),
        ]
    )
    async def achievements(
        self,
        interaction: Interaction,
        show: app_commands.Choice[str] | None = None,
    ):
        await interaction.response.defer(thinking=True, ephemeral=True)
        user_id = str(interaction.user.id)

        try:
            newly_earned, report, total = await asyncio.to_thread(
                self._load_view, user_id
            )
        except Exception:
            logger.exception(f'Loading achievements failed for user {user_id}')
            await interaction.followup.send(ERROR_MESSAGE, ephemeral=True)
            return

        mode = (show.value if show else 'earned').lower()
        earned = [e for e in report if e.earned]
        locked = [e for e in report if not e.earned]

        embed = discord.Embed(
            title=f'Achievements for {interaction.user.display_name}',
            description=(
                f'{len(earned)}/{len(report)} unlocked '
                f'• {total} points'
            ),
            color=discord.Color.gold(),
        )
        if newly_earned:
            add_section(
                embed,
                'Just unlocked',
                [f'{a.icon} {a.name} (+{a.points} pts)' for a in newly_earned],
                '',
            )
        if mode in ('earned', 'all'):
            add_section(
                embed,
                'Earned',
                [format_entry(e) for e in earned],
                'No achievements earned yet.',
            )
        if mode in ('locked', 'all'):
            add_section(
                embed,
                'Locked',
                [format_entry(e) for e in locked],
                'No locked achievements.',
            )

        await interaction.followup.send(embed=embed, ephemeral=True)

    @app_commands.command(name='points', description='Show your achievement points')
    async def points(self, interaction: Interaction):
        user_id = str(interaction.user.id)
        try:
            total = await asyncio.to_thread(self.engine.total_points, user_id)
        except Exception:
            logger.exception(f'Loading points failed for user {user_id}')
            await interaction.response.send_message(ERROR_MESSAGE, ephemeral=True)
            return
        await interaction.response.send_message(
            f'You have **{total}** achievement points.', ephemeral=True
        )


async def setup(bot: commands.Bot):
    await bot.add_cog(AchievementsCog(bot))
