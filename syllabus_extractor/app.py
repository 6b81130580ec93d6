"""
Flask web application for the syllabus-to-assignments extractor.

This is the HTTP interface used by the coursework tracker. It provides:
- Syllabus analysis from plain text (/analyze)
- PDF upload and analysis (/upload)
- Listing the stored assignments of a course
- A health check

Errors are returned as JSON bodies carrying the error code from
syllabus_extractor.exceptions so clients can branch on them.
"""

import logging
import os

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from .assignment_store import get_assignment_store
from .config import load_config
from .exceptions import SyllabusError
from .models import ExtractionResult, assignment_to_dict, course_info_to_dict
from .pdf_text import extract_text
from .pipeline import process_syllabus

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
app.secret_key = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

# Configuration
ALLOWED_EXTENSIONS = {'pdf'}
MAX_FILE_SIZE = 16 * 1024 * 1024  # 16MB

app.config['MAX_CONTENT_LENGTH'] = MAX_FILE_SIZE
# Created on first use; tests may preset both
app.config.setdefault('ASSIGNMENT_STORE', None)
app.config.setdefault('EXTRACTOR_CONFIG', None)


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed.

    Args:
        filename: Name of the uploaded file

    Returns:
        True if file extension is allowed, False otherwise
    """
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def get_store():
    """Assignment store for this app (auto-selects SQLite or PostgreSQL)."""
    if current_app.config['ASSIGNMENT_STORE'] is None:
        current_app.config['ASSIGNMENT_STORE'] = get_assignment_store()
    return current_app.config['ASSIGNMENT_STORE']


def get_config():
    if current_app.config['EXTRACTOR_CONFIG'] is None:
        current_app.config['EXTRACTOR_CONFIG'] = load_config()
    return current_app.config['EXTRACTOR_CONFIG']


def error_response(message: str, code: str, status: int):
    return jsonify({"success": False, "error": message, "code": code}), status


def result_response(result: ExtractionResult):
    """Serialize an ExtractionResult into the analyze/upload response body."""
    assignments = [assignment_to_dict(a) for a in result.assignments]
    return jsonify({
        "success": True,
        "course": course_info_to_dict(result.course),
        "assignments": assignments,
        "assignmentsCount": len(assignments),
        "strategy": result.strategy,
    })


@app.route('/health')
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})


@app.route('/analyze', methods=['POST'])
def analyze():
    """Analyze syllabus text and store the assignments found.

    Expects a JSON body: {"courseId": ..., "text": ..., "assignments": [...]}.
    When the client already parsed assignments they are validated and stored
    instead of running extraction.

    Returns:
        JSON with the course details and the stored assignments
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    course_id = data.get('courseId')
    text = data.get('text')

    if not course_id or not text:
        return error_response("Missing required fields: courseId, text", "BAD_REQUEST", 400)
    if not isinstance(text, str) or isinstance(course_id, bool) or not isinstance(course_id, (str, int)):
        return error_response("courseId must be a string or integer and text a string", "BAD_REQUEST", 400)

    client_assignments = data.get('assignments')
    if not isinstance(client_assignments, list):
        client_assignments = None

    result = process_syllabus(
        text,
        str(course_id),
        store=get_store(),
        config=get_config(),
        client_assignments=client_assignments,
    )
    return result_response(result)


@app.route('/upload', methods=['POST'])
def upload_file():
    """Handle syllabus PDF upload.

    This route reads the uploaded PDF in memory, turns it into text with
    pdfplumber and then analyzes it exactly like /analyze.

    Returns:
        JSON with the course details and the stored assignments
    """
    # Check if file was uploaded
    if 'syllabus' not in request.files:
        return error_response("No file uploaded. Use the 'syllabus' form field.", "BAD_REQUEST", 400)

    file = request.files['syllabus']
    course_id = request.form.get('courseId')

    if not course_id:
        return error_response("Missing required field: courseId", "BAD_REQUEST", 400)

    # Check if file is selected
    if file.filename == '':
        return error_response("No file selected. Please choose a PDF file.", "BAD_REQUEST", 400)

    # Check file extension
    if not allowed_file(file.filename):
        return error_response("Invalid file type. Please upload a PDF file.", "BAD_REQUEST", 400)

    logger.info("Processing upload %s for course %s", secure_filename(file.filename), course_id)
    text = extract_text(file.stream)
    result = process_syllabus(text, course_id, store=get_store(), config=get_config())
    return result_response(result)


@app.route('/courses/<course_id>/assignments')
def list_assignments(course_id: str):
    """Return the stored assignments of a course."""
    records = get_store().list_assignments(course_id)
    return jsonify({"courseId": course_id, "assignments": records, "count": len(records)})


@app.errorhandler(SyllabusError)
def handle_syllabus_error(error: SyllabusError):
    """Map extraction/storage failures to JSON errors."""
    status = error.http_status or 500
    if status >= 500:
        logger.error("Request failed: %s", error.message)
    return error_response(error.message, error.code, status)


@app.errorhandler(RequestEntityTooLarge)
def file_too_large(error):
    return error_response("File too large. Maximum size is 16MB.", "FILE_TOO_LARGE", 413)


@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    return error_response("Not found", "NOT_FOUND", 404)


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    return error_response("Internal server error", "INTERNAL_ERROR", 500)


if __name__ == '__main__':
    # Run development server
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host='0.0.0.0', port=5000)
