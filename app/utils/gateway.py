# app/utils/gateway.py
"""
Tenant-scoped document storage.

Every read and write names the tenant that owns the data; documents of one
tenant are never returned for another. The only cross-tenant reads are
`list_all` and `find`, used by the admin back-office and public invoice links.
"""
import uuid

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.models import Document
from .errors import MissingTenant, NotFound, UpstreamFailure
from .timezone_helper import utc_now

# Fields the store stamps itself
SERVER_FIELDS = ('_id', 'id', 'createdAt', 'updatedAt')

TIMESTAMP_COLUMNS = {
    'createdAt': Document.created_at,
    'updatedAt': Document.updated_at,
}

KIND_LABELS = {
    'customers': 'Customer',
    'devices': 'Device',
    'jobCards': 'Job card',
    'invoices': 'Invoice',
    'invoiceLinks': 'Invoice link',
    'inventory': 'Inventory item',
    'repairs': 'Repair ticket',
    'company': 'Company profile',
    'expenses': 'Expense',
    'budgets': 'Budget',
    'users': 'User',
    'loginActivities': 'Activity',
    'paymentOrders': 'Payment order',
}


def new_document_id():
    return uuid.uuid4().hex


def _clean(record):
    return {key: value for key, value in (record or {}).items() if key not in SERVER_FIELDS}


class DocumentGateway:
    def __init__(self, db):
        self.db = db

    # Internal helpers

    def _scope(self, tenant_id, kind):
        if not tenant_id:
            raise MissingTenant(f'A tenant id is required to access {kind}')
        return Document.query.filter_by(tenant_id=tenant_id, kind=kind)

    def _load(self, tenant_id, kind, doc_id):
        document = self._scope(tenant_id, kind).filter_by(doc_id=doc_id).first()
        if document is None:
            raise NotFound(f"{KIND_LABELS.get(kind, 'Document')} not found")
        return document

    def _commit(self, action, kind):
        try:
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            current_app.logger.error(f"Database error during {action} on {kind}: {str(e)}")
            raise UpstreamFailure('Failed to save data', provider='database', detail=str(e))

    @staticmethod
    def _ordered(records, order_field, descending):
        present = [record for record in records if record.get(order_field) is not None]
        missing = [record for record in records if record.get(order_field) is None]
        present.sort(key=lambda record: record[order_field], reverse=descending)
        return present + missing

    def _query_records(self, query, order_field, descending, limit):
        column = TIMESTAMP_COLUMNS.get(order_field)
        if column is not None:
            if descending:
                query = query.order_by(column.desc(), Document.seq.desc())
            else:
                query = query.order_by(column.asc(), Document.seq.asc())
            if limit:
                query = query.limit(limit)
            return [document.to_dict() for document in query.all()]

        # Ordering on a field inside the JSON payload
        documents = query.order_by(Document.created_at.desc(), Document.seq.desc()).all()
        records = self._ordered([document.to_dict() for document in documents], order_field, descending)
        return records[:limit] if limit else records

    # Tenant-scoped operations

    def create(self, tenant_id, kind, record, doc_id=None):
        """Store a new document and return its id"""
        if not tenant_id:
            raise MissingTenant(f'A tenant id is required to access {kind}')
        doc_id = doc_id or new_document_id()
        now = utc_now()
        data = _clean(record)
        data['id'] = doc_id

        document = Document(
            doc_id=doc_id,
            tenant_id=tenant_id,
            kind=kind,
            data=data,
            created_at=now,
            updated_at=now,
        )
        self.db.session.add(document)
        self._commit('create', kind)
        current_app.logger.debug(f"Created {kind}/{doc_id} for tenant {tenant_id}")
        return doc_id

    def get(self, tenant_id, kind, doc_id):
        return self._load(tenant_id, kind, doc_id).to_dict()

    def exists(self, tenant_id, kind, doc_id):
        return self._scope(tenant_id, kind).filter_by(doc_id=doc_id).first() is not None

    def list(self, tenant_id, kind, order_field='createdAt', descending=True, limit=None):
        return self._query_records(self._scope(tenant_id, kind), order_field, descending, limit)

    def update(self, tenant_id, kind, doc_id, partial):
        """Merge fields into a stored document and return the result"""
        document = self._load(tenant_id, kind, doc_id)
        data = dict(document.data or {})
        data.update(_clean(partial))
        data['id'] = document.doc_id
        # Assign a new dict so the JSON column is flagged dirty
        document.data = data
        document.updated_at = utc_now()
        self._commit('update', kind)
        return document.to_dict()

    def put(self, tenant_id, kind, doc_id, record):
        """Create or replace a document under a caller-chosen id"""
        document = self._scope(tenant_id, kind).filter_by(doc_id=doc_id).first()
        if document is None:
            self.create(tenant_id, kind, record, doc_id=doc_id)
            return self.get(tenant_id, kind, doc_id)

        data = _clean(record)
        data['id'] = document.doc_id
        document.data = data
        document.updated_at = utc_now()
        self._commit('put', kind)
        return document.to_dict()

    def delete(self, tenant_id, kind, doc_id):
        document = self._load(tenant_id, kind, doc_id)
        self.db.session.delete(document)
        self._commit('delete', kind)
        current_app.logger.debug(f"Deleted {kind}/{doc_id} for tenant {tenant_id}")

    # Cross-tenant reads

    def list_all(self, kind, order_field='createdAt', descending=True, limit=None):
        return self._query_records(Document.query.filter_by(kind=kind), order_field, descending, limit)

    def find(self, kind, doc_id):
        document = Document.query.filter_by(kind=kind, doc_id=doc_id).first()
        if document is None:
            raise NotFound(f"{KIND_LABELS.get(kind, 'Document')} not found")
        return document.to_dict()


def get_gateway():
    """The gateway bound to the current app"""
    return current_app.extensions['documents']
