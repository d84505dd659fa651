"""
Routes for uploading PDFs and viewing their taxonomy.
"""
from flask import Blueprint, request, jsonify, render_template_string
from werkzeug.exceptions import RequestEntityTooLarge

from .renderer import TaxonomyRenderer
from .services import PdfAnalysisService


def create_pdf_analysis_routes(
    analysis_service: PdfAnalysisService,
    renderer: TaxonomyRenderer,
    index_template: str,
    max_pdf_size_mb: int,
) -> Blueprint:
    """Create Flask routes for PDF taxonomy generation."""

    bp = Blueprint('pdf_analysis', __name__)

    def render_page(status: int = 200, form=None, **context):
        if form is None:
            form = {
                "page_start": request.form.get("page_start", "") if request.method == "POST" else "",
                "page_end": request.form.get("page_end", "") if request.method == "POST" else "",
            }
        page = render_template_string(
            index_template,
            result=context.get("result"),
            error=context.get("error"),
            filename=context.get("filename"),
            form=form,
            max_pdf_size_mb=max_pdf_size_mb,
            **renderer.template_helpers()
        )
        return page, status

    @bp.route("/", methods=["GET"])
    def index():
        """Show the upload form."""
        return render_page()

    @bp.route("/analyze", methods=["POST"])
    def analyze():
        """Generate a taxonomy from the upload form and render it."""
        upload = request.files.get("file")
        outcome = analysis_service.analyze_upload(
            upload,
            request.form.get("page_start"),
            request.form.get("page_end"),
        )
        if outcome.success:
            return render_page(result=outcome.result, filename=upload.filename)
        return render_page(status=outcome.status, error=outcome.message)

    @bp.route("/api/taxonomy", methods=["POST"])
    def api_taxonomy():
        """Generate a taxonomy from multipart upload or JSON data URI."""
        if request.is_json:
            outcome = analysis_service.analyze_data_uri(request.get_json(silent=True))
        else:
            outcome = analysis_service.analyze_upload(
                request.files.get("file"),
                request.form.get("page_start"),
                request.form.get("page_end"),
            )

        if outcome.success:
            return jsonify(outcome.result.to_dict())
        return jsonify(outcome.to_error_dict()), outcome.status

    @bp.route("/api/filter_content", methods=["POST"])
    def api_filter_content():
        """Strip headers, footers and boilerplate from document text."""
        outcome = analysis_service.filter_text(request.get_json(silent=True))
        if outcome.success:
            return jsonify(outcome.filtered.model_dump(by_alias=True))
        return jsonify(outcome.to_error_dict()), outcome.status

    @bp.app_errorhandler(RequestEntityTooLarge)
    def too_large(e):
        """Uploads above MAX_CONTENT_LENGTH."""
        message = f"PDF is too large. Maximum size is {max_pdf_size_mb}MB."
        if request.path.startswith("/api/"):
            return jsonify({"error": "File too large", "message": message}), 413
        # The form body was rejected, so it cannot be echoed back
        return render_page(status=413, form={}, error=message)

    return bp
