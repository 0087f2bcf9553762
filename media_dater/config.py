"""
Configuration constants for media-dater.
"""

# --- File Type Definitions ---
# Formats exifread can pull DateTime tags out of
JPEG_EXTS = {'.jpg', '.jpeg', '.jpe'}
TIFF_EXTS = {'.tif', '.tiff'}
HEIC_EXTS = {'.heic', '.heif'}
RAW_EXTS = {'.cr2', '.nef', '.arw', '.orf', '.rw2', '.dng'}

# Raster formats without an EXIF reader: modification time only
PLAIN_IMAGE_EXTS = {'.png', '.gif', '.bmp', '.cr3'}

VIDEO_EXTS = {'.mp4', '.mov', '.m4v', '.avi', '.mts', '.m2ts', '.3gp', '.mpg', '.mpeg', '.tod'}

EXIF_EXTS = JPEG_EXTS | TIFF_EXTS | HEIC_EXTS | RAW_EXTS
IMAGE_EXTS = EXIF_EXTS | PLAIN_IMAGE_EXTS

KIND_IMAGE = 'image'
KIND_VIDEO = 'video'
KIND_IGNORED = 'ignored'

# Extension to Kind Mapping
EXT_TO_KIND = {}
for ext in IMAGE_EXTS: EXT_TO_KIND[ext] = KIND_IMAGE
for ext in VIDEO_EXTS: EXT_TO_KIND[ext] = KIND_VIDEO

# --- Metadata Parsing ---
# Tried in order, first parseable value wins
DATE_TAGS = [
    'EXIF DateTimeOriginal',
    'Image DateTime',
]
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# Sunday-first, index 0
WEEKDAY_TAGS = ('d-sun', 'd-mon', 'd-tues', 'd-wed', 'd-thurs', 'd-fri', 'd-sat')

# --- Naming ---
DATE_PATTERN = "{year:04d}.{month:02d}.{day:02d}"
TIME_PATTERN = "{hour:02d}.{minute:02d}.{second:02d}"
FILE_PATTERN = "{date}_{time}_{seq}{ext}"
FOLDER_PATTERN = "{date}_{weekday}"

# Folder name returned when nothing in the batch carried a timestamp
DEFAULT_FOLDER_NAME = "tmp"

# --- Layout ---
DEFAULT_SRC_DIR = "files"
DEFAULT_DEST_DIR = "dest"
STAGING_DIR_NAME = "tmp"
TITLE_SEPARATOR = "_"
PARTIAL_SUFFIX = ".partial"

# --- Copying ---
DEFAULT_MAX_WORKERS = 8
ON_ERROR_SKIP = 'skip'
ON_ERROR_ABORT = 'abort'
ON_ERROR_POLICIES = (ON_ERROR_SKIP, ON_ERROR_ABORT)

# Soft RLIMIT_NOFILE we try to reach before copying
DESIRED_OPEN_FILES = 4096
