"""
Centralized constants for the publication report exporter.
Fixed layout numbers live here so the builder stays free of magic values.
"""

# ===========================================
# PACKAGE
# ===========================================
PACKAGE_EXTENSION = 'docx'
PACKAGE_MEDIA_TYPE = (
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
)
ZIP_FIXED_TIMESTAMP = (1980, 1, 1, 0, 0, 0)   # earliest date a zip entry can hold
ZIP_FILE_MODE = 0o644
PACKAGE_REVISION = 1
PACKAGE_LAST_MODIFIED_BY = 'pubreport'

# ===========================================
# TABLES (twentieths of a point)
# ===========================================
HEADER_CELL_SHADING = 'E8E8E8'
ADMIN_COLUMN_WIDTHS = (500, 3000, 1200, 900, 700, 1000, 1500)
INDIVIDUAL_COLUMN_WIDTHS = (600, 3000, 1500, 1200, 800, 1000, 1800)
TABLE_FULL_WIDTH_PCT = 5000                  # fiftieths of a percent
HEADER_CELL_SIZE_PT = 10.0
DATA_CELL_SIZE_PT = 9.0

# ===========================================
# TYPOGRAPHY (points)
# ===========================================
ORGANIZATION_SIZE_PT = 16.0
BANNER_SIZE_PT = 14.0
EXPORT_DATE_SIZE_PT = 11.0
RESEARCHER_NAME_SIZE_PT = 12.0
RESEARCHER_FIELD_SIZE_PT = 11.0
SUMMARY_SIZE_PT = 11.0
GROUP_FIELD_SIZE_PT = 10.0
HEADING_SIZES_PT = {1: 14.0, 2: 13.0, 3: 12.0}

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/pubreport.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
