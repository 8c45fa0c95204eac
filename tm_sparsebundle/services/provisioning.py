"""Interactive sparsebundle provisioning workflow.

Workflow:
    1. Read the host's platform UUID (names the bundle)
    2. Prompt for volume name, backup size, band size, encryption, destination
    3. Validate required answers, normalize band size and destination
    4. Prompt for a password when encryption is enabled, then report a
       destination fallback
    5. Print the configuration summary and ask for confirmation
    6. Create the sparsebundle with hdiutil, echoing its output
    7. Offer to register it with ``tmutil inheritbackup``

Every failure is terminal; nothing is retried. Input problems and a declined
confirmation raise exceptions before any external command runs. Failures of
hdiutil or tmutil are reported through the returned ``ProvisionResult``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tm_sparsebundle.config import settings
from tm_sparsebundle.domain.models import (
    ProvisionOutcome,
    ProvisionResult,
    SparsebundleConfig,
)
from tm_sparsebundle.logging import LoggerFactory, operation_context
from tm_sparsebundle.storage.exceptions import (
    ImageCreationError,
    InheritBackupError,
    MissingPasswordError,
    ProvisionCancelledError,
)
from tm_sparsebundle.storage.hdiutil import create_sparsebundle
from tm_sparsebundle.storage.system_id import get_system_identifier
from tm_sparsebundle.storage.tmutil import inherit_backup
from tm_sparsebundle.storage.validation import (
    is_affirmative,
    parse_backup_size,
    parse_band_size,
    resolve_destination,
    validate_required,
)
from tm_sparsebundle.ui.prompts import Console


log = LoggerFactory.for_provision()

PROMPT_VOLUME_NAME = "Enter volume name: "
PROMPT_BACKUP_SIZE = "Enter backup size in GB: "
PROMPT_BAND_SIZE = "Enter band size in MB 1-64 (default = {default}MB): "
PROMPT_ENCRYPTION = "Enable encryption? (y/n): "
PROMPT_DESTINATION = "Enter directory path to create Sparsebundle: "
PROMPT_PASSWORD = "Set disk image password: "
PROMPT_CONFIRM = "Would you like to proceed? (y/n): "
PROMPT_INHERIT = "Would you like to inherit {bundle_name}? (y/n) "

MESSAGE_INHERIT_DONE = (
    "Done. Please create a Time Machine backup via System settings and use existing disk"
)
MESSAGE_INHERIT_SKIPPED = "Sparsebundle will not be inherited"


@dataclass(frozen=True)
class Answers:
    """Raw answers to the initial prompts."""

    volume_name: str
    backup_size: str
    band_size: str
    encryption: str
    destination: str


def collect_answers(console: Console, default_band_size: int) -> Answers:
    """Ask the five initial questions in order."""
    console.say()
    answers = Answers(
        volume_name=console.ask(PROMPT_VOLUME_NAME),
        backup_size=console.ask(PROMPT_BACKUP_SIZE),
        band_size=console.ask(PROMPT_BAND_SIZE.format(default=default_band_size)),
        encryption=console.ask(PROMPT_ENCRYPTION),
        destination=console.ask(PROMPT_DESTINATION),
    )
    console.say()
    return answers


def build_config(
    answers: Answers,
    system_id: str,
    default_band_size: int,
) -> tuple[SparsebundleConfig, bool]:
    """Validate and normalize the answers.

    Returns:
        The config, and whether the destination was replaced by the fallback

    Raises:
        MissingRequiredInputError: Volume name or backup size is empty
        InvalidBackupSizeError: Backup size is not a positive integer
    """
    validate_required(answers.volume_name, answers.backup_size)
    size_gb = parse_backup_size(answers.backup_size)
    band_size_mb = parse_band_size(answers.band_size, default=default_band_size)

    destination, substituted = resolve_destination(
        answers.destination, fallback=settings.get_path("fallback_destination")
    )

    config = SparsebundleConfig(
        volume_name=answers.volume_name,
        size_gb=size_gb,
        band_size_mb=band_size_mb,
        encrypted=is_affirmative(answers.encryption),
        destination=destination,
        system_id=system_id,
    )
    return config, substituted


def ask_password(console: Console) -> str:
    """Prompt for the image password without echo.

    Raises:
        MissingPasswordError: If the password is empty
    """
    password = console.ask_secret(PROMPT_PASSWORD)
    console.say()
    if not password:
        raise MissingPasswordError()
    return password


def offer_inheritance(
    console: Console,
    config: SparsebundleConfig,
    inherit: Callable[..., None],
) -> ProvisionResult:
    """Ask whether to inherit the new bundle and run tmutil if so."""
    bundle_path = config.bundle_path
    console.say("Found the sparsebundle that was created")
    if not console.confirm(PROMPT_INHERIT.format(bundle_name=config.bundle_name)):
        console.say(MESSAGE_INHERIT_SKIPPED)
        return ProvisionResult(
            ProvisionOutcome.INHERIT_SKIPPED,
            config=config,
            bundle_path=bundle_path,
            message=MESSAGE_INHERIT_SKIPPED,
        )

    console.say("Attempting to inherit sparsebundle")
    try:
        with operation_context("inherit", bundle=str(bundle_path)):
            inherit(bundle_path)
    except InheritBackupError as error:
        console.say(str(error))
        return ProvisionResult(
            ProvisionOutcome.INHERIT_FAILED,
            config=config,
            bundle_path=bundle_path,
            message=str(error),
        )
    console.say(MESSAGE_INHERIT_DONE)
    return ProvisionResult(
        ProvisionOutcome.INHERITED,
        config=config,
        bundle_path=bundle_path,
        message=MESSAGE_INHERIT_DONE,
    )


def run_provisioning(
    console: Console | None = None,
    *,
    get_system_id: Callable[[], str] = get_system_identifier,
    create: Callable[..., object] = create_sparsebundle,
    inherit: Callable[..., None] = inherit_backup,
) -> ProvisionResult:
    """Run the interactive workflow end to end.

    Args:
        console: Prompt/print interface (defaults to the terminal)
        get_system_id: Returns the UUID used to name the bundle
        create: Creates the bundle; called as
            ``create(config, password=..., output_callback=...)``
        inherit: Registers the bundle; called as ``inherit(bundle_path)``

    Returns:
        ProvisionResult describing how the run ended

    Raises:
        SystemIdentifierError: The platform UUID could not be read
        InputError: A required answer was missing or malformed
        ProvisionCancelledError: The user declined the confirmation
    """
    console = console or Console()
    default_band_size = settings.get_int(
        "default_band_size_mb", settings.DEFAULT_BAND_SIZE_MB
    )

    system_id = get_system_id()
    answers = collect_answers(console, default_band_size)
    config, destination_substituted = build_config(
        answers, system_id, default_band_size
    )
    log.debug(
        "Configuration accepted",
        volume_name=config.volume_name,
        size_gb=config.size_gb,
        band_size_mb=config.band_size_mb,
        encrypted=config.encrypted,
        destination=str(config.destination),
    )

    password = ask_password(console) if config.encrypted else None

    if destination_substituted:
        console.say(f"  Path not entered. Defaulting to: {config.destination}")

    console.say()
    console.say_lines(config.summary_lines())
    console.say()

    if not console.confirm(PROMPT_CONFIRM):
        console.say()
        raise ProvisionCancelledError()

    console.say()
    console.say("Creating sparsebundle disk image...")
    console.say()
    try:
        with operation_context("create", bundle=str(config.bundle_path)):
            create(config, password=password, output_callback=console.say)
    except ImageCreationError as error:
        console.say(str(error))
        return ProvisionResult(
            ProvisionOutcome.CREATION_FAILED,
            config=config,
            bundle_path=config.bundle_path,
            message=str(error),
        )

    # Inheritance is only offered for a bundle that exists
    if not config.bundle_path.is_dir():
        message = f"Sparsebundle not found at {config.bundle_path}"
        console.say(message)
        return ProvisionResult(
            ProvisionOutcome.CREATION_FAILED,
            config=config,
            bundle_path=config.bundle_path,
            message=message,
        )

    return offer_inheritance(console, config, inherit)
