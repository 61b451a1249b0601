# components/voice/grammar.py
"""
Grammar of the air conditioner voice commands.

The grammar is assembled from a phrase catalogue, one command at a time:

    grammar = (
        AirConditionerGrammar(phrases)
        .add_power_on_command()
        .add_heat_room_command()
        .build()
    )

Commands taking a target expect the phrase, a whole number and the degrees
keyword, e.g. "cool the room to 21 degrees".
"""

import re
from dataclasses import dataclass

from components.voice.commands import (
    COMMANDS_BY_TYPE,
    CommandType,
    TargetTemperatureCommand,
    VoiceCommand,
)

# Config keys of each command's phrase list
PHRASE_KEYS = {
    CommandType.POWER_ON: "power_on",
    CommandType.POWER_OFF: "power_off",
    CommandType.CURRENT_TEMPERATURE: "current_temperature",
    CommandType.HEAT_ROOM: "heat_room",
    CommandType.COOL_ROOM: "cool_room",
    CommandType.CHANGE_ROOM_TEMP: "change_temperature",
}

TARGET_COMMANDS = {
    CommandType.HEAT_ROOM,
    CommandType.COOL_ROOM,
    CommandType.CHANGE_ROOM_TEMP,
}

_PUNCTUATION = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


def normalise_phrase(text: str) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    text = _PUNCTUATION.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


@dataclass(frozen=True)
class GrammarRule:
    """One compiled phrase pattern."""

    command_type: CommandType
    pattern: re.Pattern


class GrammarError(ValueError):
    """Raised when a grammar cannot be built."""


class AirConditionerGrammar:
    """Builds and matches the command grammar."""

    def __init__(
        self,
        phrases: dict[str, list[str]],
        degrees_keyword: str = "degrees",
        min_spoken_number: int = 0,
        max_spoken_number: int = 99,
    ):
        """
        Args:
            phrases: Phrase lists keyed by command (see PHRASE_KEYS)
            degrees_keyword: Word closing every target command
            min_spoken_number: Smallest accepted target
            max_spoken_number: Largest accepted target
        """
        if min_spoken_number > max_spoken_number:
            raise GrammarError(
                f"min_spoken_number {min_spoken_number} exceeds "
                f"max_spoken_number {max_spoken_number}"
            )

        self.phrases = phrases
        self.degrees_keyword = normalise_phrase(degrees_keyword)
        self.min_spoken_number = min_spoken_number
        self.max_spoken_number = max_spoken_number

        self._catalogue: list[CommandType] = []
        self._rules: list[GrammarRule] = []
        self._built = False

    # ----------------------------------------------------------------
    # Catalogue construction
    # ----------------------------------------------------------------

    def add_power_on_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.POWER_ON)

    def add_power_off_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.POWER_OFF)

    def add_current_temperature_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.CURRENT_TEMPERATURE)

    def add_heat_room_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.HEAT_ROOM)

    def add_cool_room_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.COOL_ROOM)

    def add_change_temperature_command(self) -> "AirConditionerGrammar":
        return self._add(CommandType.CHANGE_ROOM_TEMP)

    def add_all_commands(self) -> "AirConditionerGrammar":
        """Add every supported command."""
        return (
            self.add_power_on_command()
            .add_power_off_command()
            .add_current_temperature_command()
            .add_heat_room_command()
            .add_cool_room_command()
            .add_change_temperature_command()
        )

    def _add(self, command_type: CommandType) -> "AirConditionerGrammar":
        if self._built:
            raise GrammarError("Cannot add commands to a built grammar")
        if command_type not in self._catalogue:
            self._catalogue.append(command_type)
        return self

    def build(self) -> "AirConditionerGrammar":
        """Compile the catalogue into match rules."""
        if not self._catalogue:
            raise GrammarError("Grammar has no commands")

        rules = []
        for command_type in self._catalogue:
            phrases = self.phrases.get(PHRASE_KEYS[command_type]) or []
            if not phrases:
                raise GrammarError(
                    f"No phrases configured for {PHRASE_KEYS[command_type]}"
                )
            for phrase in phrases:
                rules.append(
                    GrammarRule(command_type, self._compile(command_type, phrase))
                )

        # Longest phrases first so "cool down the room to" wins over shorter prefixes
        rules.sort(key=lambda rule: len(rule.pattern.pattern), reverse=True)

        self._rules = rules
        self._built = True
        return self

    def _compile(self, command_type: CommandType, phrase: str) -> re.Pattern:
        body = re.escape(normalise_phrase(phrase))
        if command_type in TARGET_COMMANDS:
            degrees = re.escape(self.degrees_keyword)
            return re.compile(rf"^{body} (?P<target>\d+) {degrees}$")
        return re.compile(rf"^{body}$")

    # ----------------------------------------------------------------
    # Matching
    # ----------------------------------------------------------------

    @property
    def command_types(self) -> list[CommandType]:
        return list(self._catalogue)

    def match(self, text: str) -> VoiceCommand | None:
        """
        Turn a phrase into a command.

        Returns:
            The matching command, or None if the phrase is not in the grammar
            or its target is outside the spoken number range
        """
        if not self._built:
            raise GrammarError("Grammar must be built before matching")

        normalised = normalise_phrase(text)
        for rule in self._rules:
            found = rule.pattern.match(normalised)
            if not found:
                continue

            command_class = COMMANDS_BY_TYPE[rule.command_type]
            if not issubclass(command_class, TargetTemperatureCommand):
                return command_class()

            target = int(found.group("target"))
            if not self.min_spoken_number <= target <= self.max_spoken_number:
                return None
            return command_class(target_temperature=float(target))

        return None


def build_air_conditioner_grammar(voice_config: dict) -> AirConditionerGrammar:
    """Build the full grammar from the `voice` configuration section."""
    return (
        AirConditionerGrammar(
            phrases=voice_config["phrases"],
            degrees_keyword=voice_config.get("degrees_keyword", "degrees"),
            min_spoken_number=int(voice_config.get("min_spoken_number", 0)),
            max_spoken_number=int(voice_config.get("max_spoken_number", 99)),
        )
        .add_all_commands()
        .build()
    )
