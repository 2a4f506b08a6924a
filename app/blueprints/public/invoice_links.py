from flask import current_app, redirect

from app.utils.errors import NotFound
from app.utils.gateway import get_gateway
from . import public_bp


def resolve_link(link_id):
    link = get_gateway().find('invoiceLinks', link_id)
    if not link.get('pdfUrl'):
        raise NotFound('Invoice PDF not available')
    return link


@public_bp.route('/api/invoice/<link_id>', methods=['GET'])
def open_invoice(link_id):
    return redirect(resolve_link(link_id)['pdfUrl'], code=302)


@public_bp.route('/invoice/<path:slug>', methods=['GET'])
def open_shared_invoice(slug):
    """/invoice/<shop>/<customer>/<id>; only the last segment identifies the link"""
    link_id = slug.rstrip('/').split('/')[-1]
    link = resolve_link(link_id)
    current_app.logger.debug(f"Shared invoice {link.get('invoiceNumber')} opened")
    return redirect(link['pdfUrl'], code=302)
