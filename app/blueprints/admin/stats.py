from flask import jsonify

from app.utils.calculations import admin_dashboard_stats
from app.utils.gateway import get_gateway
from app.utils.permissions import admin_required
from . import admin_bp


@admin_bp.route('/stats', methods=['GET'])
@admin_required('view_stats')
def dashboard_stats():
    gateway = get_gateway()
    accounts = gateway.list_all('users')
    activities = gateway.list_all('loginActivities')
    return jsonify(admin_dashboard_stats(accounts, activities))
