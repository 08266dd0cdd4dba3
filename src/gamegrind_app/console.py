from colorama import Fore, Style

from gamegrind_core.db.models import APIRequestLog
from gamegrind_core.models import Alert, CandidateGame


def print_alert(alert: Alert):
    print(f"{Fore.RED}[{alert.category}]{Style.RESET_ALL} {alert.header}\n    {alert.content}")


def format_candidate(game: CandidateGame) -> str:
    year = game.release_date.year if game.release_date else "????"
    lines = [
        f"{Fore.GREEN}{game.title}{Style.RESET_ALL} ({year})  #{game.game_id}",
        f"    Platforms: {game.platforms}",
        f"    Developer: {game.developer} | Publisher: {game.publisher} | Genre: {game.genre}",
    ]
    if game.cover_image_url:
        lines.append(f"    Cover: {game.cover_image_url}")
    return "\n".join(lines)


def format_request_log(log: APIRequestLog) -> str:
    color = Fore.GREEN if log.status == "Success" else Fore.RED
    code = log.error_code if log.error_code is not None else "-"
    return (
        f"{log.timestamp} user={log.user_id} {color}{log.status}{Style.RESET_ALL} "
        f"{log.response_time}ms code={code} {log.api_endpoint}"
    )
