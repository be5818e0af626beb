"""
Upload Gateway: accepts multipart uploads and stores them in an S3 bucket.
"""

__version__ = "0.1.0"
