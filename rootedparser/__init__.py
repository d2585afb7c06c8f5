"""Build consolidated filing records from IRS Form 990, 990-EZ and 990-PF e-file XML returns."""

__version__ = "0.1.0"