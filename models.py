from extensions import db
from datetime import datetime
from sqlalchemy import JSON
import uuid

# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


# Project discussion requests are written once and never updated
class ProjectDiscussion(db.Model):
    __tablename__ = 'project_discussions'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Submitter identity
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    # Project descriptors
    project_type = db.Column(db.String(100), nullable=False)
    budget = db.Column(db.String(100))
    timeline = db.Column(db.String(100))
    target_audience = db.Column(db.String(100))
    technologies = db.Column(SafeJSON, default=list)
    features = db.Column(SafeJSON, default=list)
    service_name = db.Column(db.String(255))  # Service the visitor came from, if any
    has_design = db.Column(db.String(50))
    has_content = db.Column(db.String(50))
    has_domain = db.Column(db.String(50))
    maintenance = db.Column(db.String(50))
    # Free text
    message = db.Column(db.Text, nullable=False)
    additional_requirements = db.Column(db.Text)
    preferred_contact = db.Column(db.String(50))
    urgency = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'company': self.company,
            'phone': self.phone,
            'projectType': self.project_type,
            'budget': self.budget,
            'timeline': self.timeline,
            'targetAudience': self.target_audience,
            'technologies': self.technologies or [],
            'features': self.features or [],
            'serviceName': self.service_name,
            'hasDesign': self.has_design,
            'hasContent': self.has_content,
            'hasDomain': self.has_domain,
            'maintenance': self.maintenance,
            'message': self.message,
            'additionalRequirements': self.additional_requirements,
            'preferredContact': self.preferred_contact,
            'urgency': self.urgency,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }


class ContactMessage(db.Model):
    __tablename__ = 'contact_messages'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_contact_email_date', 'email', 'created_at'),
    )
