from .. import db
from app.utils.timezone_helper import iso_timestamp, utc_now


class Document(db.Model):
    """One tenant-owned record of any kind; the fields live in `data`"""
    __tablename__ = 'documents'
    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'kind', 'doc_id', name='uq_documents_tenant_kind_doc'),
        db.Index('ix_documents_tenant_kind', 'tenant_id', 'kind'),
    )

    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    doc_id = db.Column(db.String(64), nullable=False, index=True)
    tenant_id = db.Column(db.String(128), nullable=False)
    kind = db.Column(db.String(50), nullable=False, index=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now)
    updated_at = db.Column(db.DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    def to_dict(self):
        record = dict(self.data or {})
        record['id'] = self.doc_id
        record['_id'] = self.doc_id
        record['createdAt'] = iso_timestamp(self.created_at)
        record['updatedAt'] = iso_timestamp(self.updated_at)
        return record

    def __repr__(self):
        return f'<Document {self.kind}/{self.doc_id} tenant={self.tenant_id}>'
