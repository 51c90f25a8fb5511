"""Pure building blocks of the localization pipeline."""
