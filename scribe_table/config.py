"""
Central configuration file for the ScribeTable workflow.
"""
from google import genai

# --- Model and Generation Settings ---
MODEL_CONFIG = {
    "default_model": "gemini-2.5-pro",
    "generation_config": {
        "temperature": 0.1,  # low temperature for determinism
        "max_output_tokens": 8192,
    },
}

# --- Upload Settings ---
UPLOAD_CONFIG = {
    "supported_formats": ("image/png", "image/jpeg", "image/webp"),
    "max_file_size_mb": 50,
    # ~18MB safety limit on the base64 payload (API limit is 20MB)
    "payload_limit_bytes": 18 * 1024 * 1024,
}

# --- Image Compression Settings ---
COMPRESSION_CONFIG = {
    "output_format": "JPEG",
    "output_mime_type": "image/jpeg",
    "start_quality": 90,
    "min_quality": 50,
    "quality_step": 10,
}

# --- Progress Reporting ---
PROGRESS_CONFIG = {
    "chunk_interval": 3,
    "initial_message": "Initializing...",
}

# --- Export Settings ---
EXPORT_CONFIG = {
    "csv_filename": "extracted_data.csv",
    "spreadsheet_filename": "extracted_data.xlsx",
    "sheet_name": "Sheet1",
}

# --- Prompt Templates ---
PROMPT_TEMPLATES = {
    "system_instruction":
        """You are a specialized OCR and Data Extraction AI with expertise in transcribing handwritten tabular data.
        Your goal is to achieve 100% accuracy in converting visual table data into structured text.

        Rules:
        1. Analyze the provided image carefully. Identify the rows and columns of the handwritten table.
        2. Extract the text from each cell.
        3. Maintain the structural integrity of the table.
        4. The first row of the output should correspond to the table headers found in the image.
        5. If a cell appears empty, represent it as an empty string.
        6. Do not hallucinate data. If a word is illegible, make your best guess based on context or leave it empty if completely unreadable.
        7. Return the data strictly as a JSON array of arrays (List of Lists).
           - The outer array represents rows.
           - The inner arrays represent cells within that row.
           - IMPORTANT: Output strictly raw JSON. Do NOT wrap in markdown code blocks (e.g., no ```json).""",

    "extract_table":
        "Extract the handwritten tabular data from this image into a structured 2D array JSON format.",
}

# --- Output Schema ---
TableRows = genai.types.Schema(
    type=genai.types.Type.ARRAY,
    description="A 2D array representing the table. The first array contains headers, subsequent arrays contain row data.",
    items=genai.types.Schema(
        type=genai.types.Type.ARRAY,
        items=genai.types.Schema(
            type=genai.types.Type.STRING,
            description="The content of a single cell as a string.",
        ),
    ),
)
