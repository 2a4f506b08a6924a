from flask import jsonify

from app.utils.api_helpers import query_limit
from app.utils.gateway import get_gateway
from app.utils.permissions import admin_required
from . import admin_bp


@admin_bp.route('/activity', methods=['GET'])
@admin_required('view_activity')
def recent_activity():
    activities = get_gateway().list_all(
        'loginActivities', order_field='timestamp', limit=query_limit(default=50)
    )
    return jsonify({'activities': [
        {
            'id': activity['id'],
            'userId': activity.get('userId'),
            'userName': activity.get('userName'),
            'userEmail': activity.get('userEmail'),
            'timestamp': activity.get('timestamp'),
            'action': activity.get('action', 'login'),
            'ipAddress': activity.get('ipAddress'),
            'userAgent': activity.get('userAgent'),
        }
        for activity in activities
    ]})
