"""Rich terminal display for pushup-league."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# Map rank colors from ranks.py to valid Rich color names
_COLOR_MAP: dict[str, str] = {
    "bronze": "dark_orange3",
    "silver": "grey70",
    "gold": "gold1",
    "teal": "deep_sky_blue1",
    "diamond": "cyan",
    "purple": "purple",
    "crimson": "red1",
    "legendary": "orange_red1",
}

_RARITY_COLORS: dict[str, str] = {
    "common": "white",
    "rare": "blue",
    "epic": "magenta",
    "legendary": "yellow",
}


def _safe_color(color: str) -> str:
    """Map a rank color to a valid Rich color name."""
    return _COLOR_MAP.get(color, color)


def format_number(n: int) -> str:
    """Format large numbers: 421543 -> '421.5K', 1200 -> '1,200', 1234567 -> '1.2M'."""
    if n >= 1_000_000:
        value = n / 1_000_000
        if value >= 100:
            return f"{value:.0f}M"
        return f"{value:.1f}M"
    if n >= 10_000:
        value = n / 1_000
        if value >= 1000:
            return f"{value:.0f}K"
        return f"{value:.1f}K"
    return f"{n:,}"


def _xp_bar(current: int, total: int, width: int = 20) -> str:
    """Render a progress bar as text: [████████░░░░░░░░░░░░]."""
    if total <= 0:
        return "[" + "█" * width + "]"
    ratio = max(0.0, min(current / total, 1.0))
    filled = int(ratio * width)
    empty = width - filled
    return "[" + "█" * filled + "░" * empty + "]"


def _panel(lines: list[str], title: str, border_style: str) -> Panel:
    return Panel(
        "\n".join(lines),
        title=f"[bold]{title}[/]",
        box=box.ROUNDED,
        border_style=border_style,
        width=54,
    )


def print_dashboard(data: dict) -> None:
    """Print the main dashboard with rank, XP, streak, goal and achievements."""
    rank = data.get("rank", {})
    rank_color = _safe_color(rank.get("color", "bronze"))
    progress = data.get("progress", {})
    streak = data.get("streak", {})

    lines: list[str] = []
    lines.append("")
    lines.append(f"  [bold]{data.get('username', '')}[/]")
    lines.append(f"  [bold {rank_color}]Rank {rank.get('rank', 1)} - {rank.get('title', '')}[/]")

    current = progress.get("current", 0)
    required = progress.get("required", 0)
    bar = _xp_bar(current, required)
    if data.get("max_rank"):
        lines.append(f"  {bar} MAX RANK")
    else:
        lines.append(f"  {bar} {format_number(current)}/{format_number(required)} XP")
    lines.append(
        f"  Total: [bold]{format_number(data.get('total_xp', 0))}[/] XP  |  "
        f"\U0001fa99 Coins: {format_number(data.get('coins', 0))}"
    )

    lines.append("")
    streak_text = f"{streak.get('days', 0)} days"
    if streak.get("broken"):
        streak_text += " [red](broken)[/]"
    freeze_text = " (active)" if data.get("freeze_armed") else ""
    lines.append(
        f"  \U0001f525 Streak: {streak_text}  |  "
        f"❄️  Freezes: {data.get('streak_freezes', 0)}{freeze_text}"
    )
    today_total = data.get("today_pushups", 0)
    goal = data.get("daily_goal", 0)
    check = " ✅" if today_total >= goal > 0 else ""
    lines.append(f"  \U0001f3af Today: {today_total}/{goal} push-ups{check}")
    lines.append(
        f"  \U0001f4aa Total: {format_number(data.get('total_pushups', 0))} push-ups  |  "
        f"Best: {data.get('personal_best', 0)}"
    )

    recent = data.get("recent_achievements", [])
    if recent:
        lines.append("")
        lines.append("  [bold]Recent Achievements:[/]")
        for ach in recent[:3]:
            lines.append(f"  ✅ {ach['name']} ({ach.get('description', '')})")

    closest = data.get("closest_achievements", [])
    if closest:
        lines.append("")
        lines.append("  [bold]Almost There:[/]")
        for ach in closest[:3]:
            pct = int(ach.get("progress", 0.0) * 100)
            lines.append(f"  ⏳ {ach['name']}: {ach.get('description', '')} ({pct}%)")

    lines.append("")
    console.print(_panel(lines, "PUSH-UP LEAGUE", rank_color))


def _bonus_line(result: dict) -> str:
    xp = format_number(result.get("achievement_xp", 0))
    coins = format_number(result.get("achievement_coins", 0))
    return f"  [dim]Achievement bonus: +{xp} XP, +{coins} coins[/]"


def print_log_result(result: dict) -> None:
    """Print the outcome of a logged workout."""
    workout = result.get("workout", {})
    streak = result.get("streak", {})
    rank = result.get("rank", {})

    lines: list[str] = []
    lines.append("")
    sets = workout.get("sets")
    sets_text = f" in {sets} sets" if sets else ""
    lines.append(f"  Logged [bold]{workout.get('pushups', 0)}[/] push-ups{sets_text} on {workout.get('date', '')}")
    xp_text = f"  +{result.get('xp_earned', 0)} XP"
    if result.get("capped"):
        xp_text += " [yellow](capped)[/]"
    lines.append(f"{xp_text}  |  +{result.get('coins_earned', 0)} coins")
    lines.append(f"  Streak multiplier: x{workout.get('streak_multiplier', 1.0)}")

    streak_line = f"  \U0001f525 Streak: {streak.get('days', 0)} days"
    if streak.get("freeze_used"):
        streak_line += " (freeze used)"
    elif streak.get("broken"):
        streak_line += " [red](streak reset)[/]"
    lines.append(streak_line)

    if result.get("goal_completed"):
        lines.append(f"  \U0001f3af Daily goal of {result.get('daily_goal', 0)} reached!")

    if result.get("rank_up"):
        color = _safe_color(rank.get("color", "bronze"))
        lines.append("")
        lines.append(f"  [bold {color}]RANK UP! {rank.get('title', '')}[/]")

    new_achievements = result.get("new_achievements", [])
    if new_achievements:
        lines.append("")
        lines.append("  [bold]New Achievements:[/]")
        for name in new_achievements:
            lines.append(f"  \U0001f3c6 {name}")
        lines.append(_bonus_line(result))

    warnings = result.get("warnings", [])
    if warnings:
        lines.append("")
        for warning in warnings:
            lines.append(f"  [yellow]⚠ {warning}[/]")

    lines.append("")
    console.print(_panel(lines, "Workout Logged", "green"))


def print_history(workouts: list[dict]) -> None:
    """Print workouts as a table, newest first."""
    if not workouts:
        print_no_data_message()
        return

    table = Table(
        title="Workout History",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Date", width=12)
    table.add_column("Push-ups", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("XP", justify="right")
    table.add_column("Coins", justify="right")
    table.add_column("Streak x", justify="right")
    table.add_column("Goal", justify="center")

    for workout in workouts:
        table.add_row(
            workout["date"],
            format_number(workout["pushups"]),
            str(workout["sets"]) if workout.get("sets") else "-",
            str(workout["xp_earned"]),
            str(workout["coins_earned"]),
            f"{workout['streak_multiplier']:.2f}",
            "✅" if workout.get("goal_completed") else "",
        )

    console.print(table)


def print_achievements(achievements: list[dict]) -> None:
    """Print all achievements with progress bars.

    Each dict has: id, name, description, category, rarity, progress (0.0-1.0),
    unlocked (bool), unlocked_at (str|None).
    """
    unlocked = [a for a in achievements if a.get("unlocked")]
    locked = [a for a in achievements if not a.get("unlocked")]

    # Unlocked by date desc, locked by progress desc
    unlocked.sort(key=lambda a: a.get("unlocked_at") or "", reverse=True)
    locked.sort(key=lambda a: a.get("progress", 0), reverse=True)

    table = Table(
        title=f"Achievements ({len(unlocked)}/{len(achievements)})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("", width=2)
    table.add_column("Achievement", min_width=20)
    table.add_column("Rarity", width=10)
    table.add_column("Progress", min_width=18)
    table.add_column("Date", width=12)

    for ach in unlocked + locked:
        icon = "✅" if ach.get("unlocked") else "⏳"
        rarity = ach.get("rarity", "common")
        color = _RARITY_COLORS.get(rarity, "white")
        progress = ach.get("progress", 0.0)
        table.add_row(
            icon,
            f"[bold]{ach['name']}[/]\n{ach.get('description', '')}",
            f"[{color}]{rarity.upper()}[/{color}]",
            f"{_xp_bar(int(progress * 100), 100, width=10)} {int(progress * 100)}%",
            (ach.get("unlocked_at") or "")[:10],
        )

    console.print(table)


def print_quests(quests: list[dict]) -> None:
    """Print active quests with progress and claim state."""
    table = Table(
        title="Quests",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("ID", style="dim")
    table.add_column("Quest", min_width=20)
    table.add_column("Type", width=7)
    table.add_column("Progress", min_width=16)
    table.add_column("Reward", justify="right")
    table.add_column("Status", width=10)

    for quest in quests:
        if quest["claimed"]:
            status = "[dim]claimed[/]"
        elif quest["progress"] >= quest["target"]:
            status = "[green]claim![/]"
        else:
            status = f"ends {quest['end_date'][5:]}"
        table.add_row(
            quest["id"],
            f"[bold]{quest['name']}[/]\n{quest.get('description', '')}",
            quest["type"],
            f"{_xp_bar(quest['progress'], quest['target'], width=8)} "
            f"{min(quest['progress'], quest['target'])}/{quest['target']}",
            f"{quest['xp_reward']} XP\n{quest['coin_reward']} coins",
            status,
        )

    console.print(table)


def print_claim_result(result: dict) -> None:
    """Print a successful quest claim."""
    quest = result.get("quest", {})
    lines: list[str] = []
    lines.append("")
    lines.append(f"  [bold]{quest.get('name', '')}[/] complete!")
    lines.append(f"  {result.get('message', '')}")
    for name in result.get("new_achievements", []):
        lines.append(f"  \U0001f3c6 {name}")
    if result.get("new_achievements"):
        lines.append(_bonus_line(result))
    lines.append("")
    console.print(_panel(lines, "Quest Reward", "green"))


def print_message(message: str, title: str = "PUSH-UP LEAGUE") -> None:
    """Print a short informational message."""
    console.print(_panel(["", f"  {message}", ""], title, "green"))


def print_failure(result: dict) -> None:
    """Print a failed operation in red."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"  [bold red]{result.get('message', 'Something went wrong.')}[/]")
    for warning in result.get("warnings", []):
        lines.append(f"  [yellow]⚠ {warning}[/]")
    lines.append("")
    console.print(_panel(lines, "Not Saved", "red"))


def print_no_data_message() -> None:
    """Print message when no workouts are logged yet."""
    panel = Panel(
        "\n  No workouts yet. Run [bold]pushup-league log 20[/] to log your first one.\n",
        title="[bold]PUSH-UP LEAGUE[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=54,
    )
    console.print(panel)
