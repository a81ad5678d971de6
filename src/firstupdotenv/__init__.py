"""firstupdotenv: load the nearest firstup.env into the calling shell."""

__version__ = "0.1.0"
