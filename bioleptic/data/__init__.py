from .synthetic import generate_ppg, generate_sine_mixture, pseudo_noise

__all__ = ["generate_ppg", "generate_sine_mixture", "pseudo_noise"]
