"""Document sorting by OCR and keyword classification.

Extracts text from uploaded images and PDFs with Tesseract OCR and
assigns each document to the first matching category of an ordered
keyword table.
"""

__version__ = "1.0.0"
