"""vindibot : bot Vindinium à apprentissage par renforcement tabulaire."""

__version__ = "0.1.0"
