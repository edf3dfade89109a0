"""
Utility functions for SeerrIssue
"""
from datetime import datetime


def season_label(season_number):
    """
    Display label of a season choice. Season 0 holds the extras/specials.
    """
    if season_number == 0:
        return "Extras"
    return f"Season {season_number}"

def episode_label(episode_number):
    return f"Episode {episode_number}"

def format_uptime(start_time, now=None):
    """
    Format the time elapsed since start_time as e.g. '1d 2h 3m 4s'.
    """
    uptime_seconds = ((now or datetime.now()) - start_time).total_seconds()

    days, remainder = divmod(uptime_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    uptime_str = ""
    if days > 0:
        uptime_str += f"{int(days)}d "
    if hours > 0 or days > 0:
        uptime_str += f"{int(hours)}h "
    if minutes > 0 or hours > 0 or days > 0:
        uptime_str += f"{int(minutes)}m "
    uptime_str += f"{int(seconds)}s"
    return uptime_seconds, uptime_str
