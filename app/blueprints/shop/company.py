from flask import jsonify

from app.utils.api_helpers import current_tenant, read_json, validated
from app.utils.calculations import build_terms_text
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from app.utils.terms import PREDEFINED_TERMS
from . import shop_bp

# One profile per shop, stored under a fixed id
PROFILE_ID = 'profile'


def with_terms_text(profile):
    profile['termsText'] = build_terms_text(profile.get('selectedTerms'), profile.get('customTerms'))
    return profile


@shop_bp.route('/company', methods=['GET'])
@tenant_required('view')
def get_company():
    return jsonify(with_terms_text(get_gateway().get(current_tenant(), 'company', PROFILE_ID)))


@shop_bp.route('/company', methods=['PUT'])
@tenant_required('edit')
def save_company():
    record = validated('company', read_json())
    record['userId'] = current_tenant()
    profile = get_gateway().put(current_tenant(), 'company', PROFILE_ID, record)
    return jsonify({'success': True, 'company': with_terms_text(profile)})


@shop_bp.route('/company/terms', methods=['GET'])
def list_predefined_terms():
    return jsonify(PREDEFINED_TERMS)
