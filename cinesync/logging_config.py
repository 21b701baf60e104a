"""
Configuration du logging de CineSync via loguru.

Deux sorties :
- console : lisible, coloree, avec les champs structures (item_id, media_type...)
  passes en argument nomme aux appels logger.*
- fichier : JSON avec rotation, limite aux enregistrements du package cinesync

Les reponses perimees ignorees et les appels silencieux en echec sont
journalises en DEBUG : avec le niveau par defaut, ils n'apparaissent que
dans le fichier.
"""

import sys
from pathlib import Path

from loguru import logger

LOGGER_NAME = "cinesync"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def is_app_record(record: dict) -> bool:
    """Vrai pour un enregistrement emis depuis le package cinesync."""
    name = record.get("name") or ""
    return name == LOGGER_NAME or name.startswith(LOGGER_NAME + ".")


def format_console(record: dict) -> str:
    """Gabarit console : message suivi des champs structures de l'appel."""
    fields = "".join(
        f" <dim>{key}={{extra[{key}]}}</dim>"
        for key in record["extra"]
        if key.isidentifier() and not key.startswith("_")
    )
    return CONSOLE_FORMAT + fields + "\n{exception}"


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinesync.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la console (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier JSON, toujours au niveau DEBUG
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
    """
    logger.remove()
    logger.enable(LOGGER_NAME)

    logger.add(sys.stderr, level=log_level, format=format_console, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        filter=is_app_record,
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), console_level=log_level)


def level_from_verbosity(verbose: int = 0, quiet: bool = False, default: str = "INFO") -> str:
    """Traduit les options CLI -v/-q en niveau loguru.

    Args :
        verbose : Nombre d'options -v (1 = DEBUG, 2+ = TRACE)
        quiet : Mode silencieux (erreurs uniquement), prioritaire sur verbose
        default : Niveau sans option
    """
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return default
