# components/voice/responses.py
"""Response templates spoken by the voice controlled air conditioner."""


class AirConditionerSpeechResponses:
    """Spoken responses. Templates are filled with str.format()."""

    POWERED_ON = "The air conditioner is now on."
    ALREADY_ON = "The air conditioner is already on."
    TURNING_OFF = "Turning the air conditioner off."
    TURNED_OFF = "The air conditioner is now off."
    ALREADY_OFF = "The air conditioner is already off."

    CURRENT_TEMPERATURE = "The current room temperature is {temperature:g} degrees."

    HEATING_ROOM_TO_TEMPERATURE = "Heating the room to {target:g} degrees."
    COOLING_ROOM_TO_TEMPERATURE = "Cooling the room to {target:g} degrees."
    TARGET_ABOVE_MAXIMUM = (
        "{requested:g} degrees is above my maximum, so I will stop at {target:g} degrees."
    )
    TARGET_BELOW_MINIMUM = (
        "{requested:g} degrees is below my minimum, so I will stop at {target:g} degrees."
    )

    FAIL_STARTING_UP = "I could not start, the room is already at that temperature."
