"""
Asset lifecycle JSON API
Thin HTTP surface over the identity and lifecycle engine. No persistence:
corpora for duplicate checks arrive in the request body.
"""

from datetime import date

from flask import Blueprint, current_app, jsonify, request

from itam_engine.buisness.assets.duplicates import find_potential_duplicates
from itam_engine.buisness.assets.end_of_life import get_eol_status
from itam_engine.buisness.assets.errors import AssetDomainError, AssetPayloadError
from itam_engine.buisness.assets.lifecycle import (
    AssetLifecycleStateMachine,
    can_assign,
    can_checkout_as_loaner,
    can_dispose,
)
from itam_engine.buisness.assets.normalization import normalize_asset
from itam_engine.buisness.assets.validation import (
    generate_asset_tag,
    generate_global_asset_id,
    validate_asset,
)
from itam_engine.data.assets.asset_record import coerce_asset
from itam_engine.utils.logger import get_logger
from itam_engine.utils.logging_sanitizer import (
    sanitize_dict,
    sanitize_exception_message,
    sanitize_form_data,
)

bp = Blueprint('lifecycle_api', __name__)
logger = get_logger("itam_engine.routes.lifecycle_api")

POLICIES = {
    'dispose': can_dispose,
    'assign': can_assign,
    'loaner-checkout': can_checkout_as_loaner,
}


def _catalog():
    return current_app.extensions['itam_catalog']


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise AssetPayloadError("Request body must be a JSON object")
    return body


def _require(body: dict, key: str):
    if key not in body or body[key] is None:
        raise AssetPayloadError(f"Missing required key '{key}'")
    return body[key]


def _int_arg(key: str) -> int:
    value = request.args.get(key, type=int)
    if value is None:
        raise AssetPayloadError(f"Query parameter '{key}' must be an integer")
    return value


@bp.errorhandler(AssetDomainError)
def handle_domain_error(error):
    logger.warning(f"Rejected {request.method} {request.path}: {sanitize_exception_message(error)}")
    return jsonify({'error': str(error)}), 400


@bp.route('/normalize', methods=['POST'])
def normalize():
    """Canonicalize manufacturer, model, serial and tag"""
    asset = normalize_asset(_json_body(), _catalog())
    return jsonify(asset.to_dict())


@bp.route('/validate', methods=['POST'])
def validate():
    body = _json_body()
    result = validate_asset(body, _catalog())
    if not result.valid:
        logger.debug(f"Validation failed for {sanitize_dict(body).get('globalAssetId')}: {result.error_fields()}")
    return jsonify(result.to_dict())


@bp.route('/transitions/check', methods=['POST'])
def check_transition():
    """
    Body: {"asset": {...}, "to": "<state>", "from": "<state>"?}
    ``from`` defaults to the asset's current state.
    """
    body = _json_body()
    asset = coerce_asset(_require(body, 'asset'))
    from_state = body.get('from') or asset.state
    verdict = AssetLifecycleStateMachine.is_valid_transition(from_state, _require(body, 'to'), asset)
    return jsonify(verdict.to_dict())


@bp.route('/transitions/next', methods=['POST'])
def next_states():
    """Body: {"state": "<state>", "asset": {...}?}"""
    body = _json_body()
    asset = body.get('asset')
    if asset is not None and not isinstance(asset, dict):
        raise AssetPayloadError("'asset' must be a JSON object")
    state = body.get('state') or (asset or {}).get('state')
    if not state:
        raise AssetPayloadError("Missing required key 'state'")
    return jsonify({
        'state': state,
        'nextStates': AssetLifecycleStateMachine.get_valid_next_states(state, asset),
    })


@bp.route('/policies/<policy>', methods=['POST'])
def check_policy(policy):
    check = POLICIES.get(policy)
    if check is None:
        return jsonify({'error': f"Unknown policy '{policy}'"}), 404
    return jsonify(check(_json_body()).to_dict())


@bp.route('/duplicates', methods=['POST'])
def duplicates():
    """Body: {"candidate": {...}, "existing": [{...}, ...]}"""
    body = _json_body()
    existing = body.get('existing') or []
    if not isinstance(existing, list):
        raise AssetPayloadError("'existing' must be a list of assets")

    matches = find_potential_duplicates(_require(body, 'candidate'), existing)
    return jsonify({'duplicates': [match.to_dict() for match in matches]})


@bp.route('/intake', methods=['POST'])
def intake_create():
    """Body: {"asset": {...}, "sequence": int?, "existing": [...]?}"""
    body = _json_body()
    logger.debug(f"Intake create: {sanitize_dict(body.get('asset') or {})}")
    result = current_app.extensions['itam_intake'].create(
        _require(body, 'asset'),
        sequence=body.get('sequence'),
        existing_assets=body.get('existing') or [],
    )
    return jsonify(result.to_dict()), 200 if result.accepted else 422


@bp.route('/intake', methods=['PUT'])
def intake_update():
    """Body: {"previous": {...}, "asset": {...}, "existing": [...]?}"""
    body = _json_body()
    result = current_app.extensions['itam_intake'].update(
        _require(body, 'previous'),
        _require(body, 'asset'),
        existing_assets=body.get('existing') or [],
    )
    return jsonify(result.to_dict()), 200 if result.accepted else 422


@bp.route('/ids/global', methods=['GET'])
def global_asset_id():
    year = request.args.get('year', type=int)
    return jsonify({'globalAssetId': generate_global_asset_id(_int_arg('sequence'), year)})


@bp.route('/ids/tag', methods=['GET'])
def asset_tag():
    logger.debug(f"Asset tag request: {sanitize_form_data(request.args)}")
    site = request.args.get('site', '')
    category = request.args.get('category', '')
    if not site or not category:
        raise AssetPayloadError("Query parameters 'site' and 'category' are required")
    return jsonify({'assetTag': generate_asset_tag(site, category, _int_arg('sequence'))})


@bp.route('/eol', methods=['POST'])
def eol_status():
    """Body: {"asset": {...}, "today": "YYYY-MM-DD"?}"""
    body = _json_body()
    today = body.get('today')
    try:
        today = date.fromisoformat(today) if today else None
    except ValueError:
        raise AssetPayloadError(f"'today' must be an ISO date, got {today!r}")
    return jsonify(get_eol_status(_require(body, 'asset'), today, _catalog()).to_dict())
