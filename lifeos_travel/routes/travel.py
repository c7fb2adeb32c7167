# lifeos_travel/routes/travel.py
"""Travel routes and blueprint configuration."""

import io
import logging
import os

from flask import Blueprint, jsonify, request, send_file, send_from_directory

from lifeos_travel.api.config import get_google_maps_config, get_public_base_url
from lifeos_travel.api.errors import NotFoundError, TravelError, ValidationError
from lifeos_travel.api.rendering import EditorState, build_public_view, load_public_itinerary

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFoundError: 404,
}


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def create_travel_blueprint(base_dir, itinerary_service, place_lookup, photo_service, photo_dir):
    """Create and configure the travel blueprint.

    Args:
        base_dir: Absolute path to the application directory
        itinerary_service: ItineraryService shared with the socket handlers
        place_lookup: PlaceLookup used for autocomplete and details
        photo_service: PhotoService handling stop photo uploads
        photo_dir: Directory uploaded photos are served from

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint(
        "travel",
        __name__,
        static_folder=os.path.join(base_dir, 'static'),
        static_url_path='/static',
        url_prefix="/travel"
    )

    @travel_bp.errorhandler(TravelError)
    def handle_travel_error(error):
        """Validation, ordering and not-found errors never escape as 500s."""
        status = next((code for cls, code in ERROR_STATUS.items() if isinstance(error, cls)), 400)
        logger.warning(f"{request.method} {request.path} rejected: {error}")
        return jsonify(error.to_dict()), status

    # ------------------------------------------------------------------ #
    # Itineraries
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/itineraries", methods=["GET", "POST"])
    def api_itineraries():
        """List itineraries or create a new one."""
        if request.method == "POST":
            itinerary = itinerary_service.create_itinerary(_json_body())
            return jsonify(itinerary.to_dict()), 201
        return jsonify([i.to_dict() for i in itinerary_service.list_itineraries()])

    @travel_bp.route("/api/itineraries/<itinerary_id>", methods=["GET", "PUT", "DELETE"])
    def api_itinerary(itinerary_id):
        """Retrieve, update or delete one itinerary."""
        if request.method == "PUT":
            return jsonify(itinerary_service.update_itinerary(itinerary_id, _json_body()).to_dict())
        if request.method == "DELETE":
            itinerary_service.delete_itinerary(itinerary_id)
            return "", 204
        return jsonify(itinerary_service.get_itinerary(itinerary_id).to_dict())

    @travel_bp.route("/api/itineraries/<itinerary_id>/editor")
    def api_editor_view(itinerary_id):
        """Grouped day sections; ``collapsed`` lists the days the client folded."""
        state = EditorState.from_collapsed(request.args.getlist("collapsed"))
        return jsonify(itinerary_service.editor_view(itinerary_id, state))

    # ------------------------------------------------------------------ #
    # Stops
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/itineraries/<itinerary_id>/stops", methods=["POST"])
    def api_add_stop(itinerary_id):
        stop = itinerary_service.add_stop(itinerary_id, _json_body())
        return jsonify(stop.to_dict()), 201

    @travel_bp.route("/api/itineraries/<itinerary_id>/stops/<stop_id>", methods=["PUT", "DELETE"])
    def api_stop(itinerary_id, stop_id):
        if request.method == "DELETE":
            itinerary_service.remove_stop(itinerary_id, stop_id)
            return "", 204
        return jsonify(itinerary_service.edit_stop(itinerary_id, stop_id, _json_body()).to_dict())

    @travel_bp.route("/api/itineraries/<itinerary_id>/stops/<stop_id>/move", methods=["POST"])
    def api_move_stop(itinerary_id, stop_id):
        direction = _json_body().get("direction", "")
        moved = itinerary_service.move_stop(itinerary_id, stop_id, direction)
        return jsonify({"moved": moved, "view": itinerary_service.editor_view(itinerary_id)})

    @travel_bp.route("/api/itineraries/<itinerary_id>/stops/<stop_id>/toggle", methods=["POST"])
    def api_toggle_stop(itinerary_id, stop_id):
        return jsonify(itinerary_service.toggle_stop(itinerary_id, stop_id).to_dict())

    @travel_bp.route("/api/itineraries/<itinerary_id>/stops/<stop_id>/complete", methods=["POST"])
    def api_complete_visit(itinerary_id, stop_id):
        """Mark a stop visited and log it to the journal."""
        stop, journal_entry_id = itinerary_service.complete_visit(itinerary_id, stop_id)
        return jsonify({"stop": stop.to_dict(), "journalEntryId": journal_entry_id})

    # ------------------------------------------------------------------ #
    # Sharing & export
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/itineraries/<itinerary_id>/share", methods=["POST"])
    def api_toggle_share(itinerary_id):
        itinerary = itinerary_service.toggle_public_share(itinerary_id)
        return jsonify({
            "isPublic": itinerary.is_public,
            "publicShareToken": itinerary.public_share_token,
            "shareUrl": itinerary_service.share_url(itinerary, get_public_base_url()),
        })

    @travel_bp.route("/api/itineraries/<itinerary_id>/pdf")
    def api_export_pdf(itinerary_id):
        pdf_bytes, filename = itinerary_service.export_pdf(itinerary_id)
        return send_file(
            io.BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=filename,
        )

    @travel_bp.route("/api/share/<token>")
    def api_public_itinerary(token):
        """Read-only public copy; unavailable links get a 404 with a reason."""
        itinerary = load_public_itinerary(itinerary_service.store, token)
        return jsonify(build_public_view(itinerary))

    # ------------------------------------------------------------------ #
    # Places & photos
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/places/search")
    def api_search_places():
        predictions = place_lookup.search_places(request.args.get("q", ""))
        return jsonify({"predictions": [p.to_dict() for p in predictions]})

    @travel_bp.route("/api/places/<place_id>")
    def api_place_details(place_id):
        details = place_lookup.get_place_details(place_id)
        return jsonify({"details": details.to_dict() if details else None})

    @travel_bp.route("/api/photos", methods=["POST"])
    def api_upload_photos():
        files = request.files.getlist("photos")
        if not files:
            raise ValidationError("No photos uploaded")
        batch = [(f.filename or "photo", f.read(), f.mimetype) for f in files]
        return jsonify(photo_service.upload_batch(batch).to_dict())

    @travel_bp.route("/photos/<path:filename>")
    def photo_file(filename):
        return send_from_directory(photo_dir, filename)

    # ------------------------------------------------------------------ #
    # Misc
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/config")
    def api_config():
        """Return Google Maps configuration for frontend."""
        config = get_google_maps_config()

        if config.get("api_key"):
            return jsonify({
                "auth_type": "api_key",
                "google_maps_api_key": config["api_key"],
                "google_maps_client_id": config.get("client_id", ""),
                "client_secret_configured": bool(config.get("client_secret"))
            })
        else:
            return jsonify({
                "error": "No Google Maps API key configured"
            }), 500

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ['create_travel_blueprint']
