"""Resource files and configuration templates."""


def get_default_config() -> str:
    """Return default configuration YAML content."""
    return """# readsieve Configuration File
# Values here are defaults; command-line flags take precedence.

filter:
  # Minimum average Phred quality (0 disables the quality filter)
  minqual: 0.0
  minlength: 1
  maxlength: 2147483647
  # Bases trimmed from the start / end of every emitted read
  headcrop: 0
  tailcrop: 0
  # Worker threads (ignored while contamination screening is active)
  threads: 4
  # FASTA of contaminant sequences; reads aligning to it are dropped
  contam: ~
  # ASCII offset of the quality encoding
  phred_offset: 33
  # Threads used by minimap2 to index the contamination reference
  aligner_threads: 8

runtime:
  log_level: "WARNING"
  log_file: ~
"""
