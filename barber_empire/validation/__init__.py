"""Form validation package."""

from barber_empire.validation.validator import FormValidator, clamp_simulator_value

__all__ = ["FormValidator", "clamp_simulator_value"]
