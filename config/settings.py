#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from pydantic_settings import BaseSettings

from .constants import PACKAGE_EXTENSION


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Report Identity ==========
    organization_name: str = "Université Lédéa Bernard OUEDRAOGO"
    report_title: str = "Scientific Publications Report"
    report_language: str = "en"

    # ========== Delivery ==========
    admin_filename_prefix: str = "report-publications"
    individual_filename_prefix: str = "my-publications"
    package_extension: str = PACKAGE_EXTENSION

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / "data" / "output"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        env_prefix = "PUBREPORT_"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def filename_prefix(self, is_admin: bool) -> str:
        """Get the download filename prefix for an export mode"""
        if is_admin:
            return self.admin_filename_prefix
        return self.individual_filename_prefix


# Global settings instance
settings = Settings()
