"""
Configuration constants for the hash organizer.
"""
import os

# --- Naming ---
# A stem matching this (via re.fullmatch) already looks like a fingerprint.
# Lowercase only: the hasher never emits uppercase hex.
FINGERPRINT_PATTERN = r"[a-f0-9]{32}"

# --- Hashing & Performance ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# Worker pool defaults to the available hardware parallelism
DEFAULT_MAX_WORKERS = os.cpu_count() or 1

# --- Logging ---
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
