# catalog/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Store column name -> CourseRecord attribute.
COURSE_FIELDS = {
    "id": "course_id",
    "titulo": "title",
    "titulo_complemento": "title_complement",
    "slug": "slug",
    "empresa": "company",
    "tipo": "course_type",
    "categoria": "category",
    "segmento": "segment",
    "segmentos_adicionais": "extra_segments",
    "modalidade": "modality",
    "summary": "summary",
    "description": "description",
    "apresentacao": "presentation",
    "metodologia": "methodology",
    "objetivos": "objectives",
    "aprendizados": "learnings",
    "motivos_participar": "reasons_to_attend",
    "vantagens": "advantages",
    "vantagens_ead": "online_advantages",
    "publico_alvo": "audience",
    "tags": "tags",
    "badges": "badges",
    "programacao": "program",
    "palestrantes": "speakers",
    "professores": "teachers",
    "custom_fields": "custom_fields",
    "carga_horaria": "workload_hours",
    "nivel": "level",
    "deliverables": "deliverables",
    "status": "status",
    "destaque": "featured",
    "novo": "is_new",
    "landing_page": "landing_page",
    "pdf_url": "pdf_url",
    "related_ids": "related_ids",
}

LIST_FIELDS = {
    "extra_segments", "modality", "objectives", "learnings",
    "reasons_to_attend", "advantages", "online_advantages", "audience",
    "tags", "badges", "program", "speakers", "teachers", "deliverables",
    "related_ids",
}


@dataclass
class CourseRecord:
    course_id: str
    title: str
    title_complement: Optional[str] = None
    slug: Optional[str] = None
    company: Optional[str] = None         # 'JML' | 'Conecta'
    course_type: Optional[str] = None     # 'ead' | 'aberto' | 'incompany' | 'hibrido'
    category: Optional[str] = None
    segment: Optional[str] = None
    extra_segments: List[str] = field(default_factory=list)
    modality: List[str] = field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    presentation: Optional[str] = None
    methodology: Optional[str] = None
    objectives: List[str] = field(default_factory=list)
    learnings: List[str] = field(default_factory=list)
    reasons_to_attend: List[str] = field(default_factory=list)
    advantages: List[str] = field(default_factory=list)
    online_advantages: List[str] = field(default_factory=list)
    audience: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    badges: List[str] = field(default_factory=list)
    program: List[Dict[str, Any]] = field(default_factory=list)  # {title, description, topics}
    speakers: List[Any] = field(default_factory=list)
    teachers: List[Any] = field(default_factory=list)
    custom_fields: Dict[str, Any] = field(default_factory=dict)
    workload_hours: Optional[float] = None
    level: Optional[str] = None
    deliverables: List[str] = field(default_factory=list)
    status: str = "draft"                 # 'draft' | 'published' | 'archived'
    featured: bool = False
    is_new: bool = False
    landing_page: Optional[str] = None
    pdf_url: Optional[str] = None
    related_ids: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CourseRecord":
        """Build a record from a row keyed by the store's column names."""
        if not isinstance(data, dict):
            raise ValueError(f"Course row must be a mapping, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            attr = COURSE_FIELDS.get(key)
            if attr is None:
                extra[key] = value
                continue
            if attr in LIST_FIELDS and value is not None and not isinstance(value, list):
                # The store keeps some list columns as a single string
                value = [value]
            if value is None and attr in LIST_FIELDS:
                continue
            kwargs[attr] = value
        if "course_id" not in kwargs:
            raise ValueError("Course row is missing 'id'")
        kwargs["course_id"] = str(kwargs["course_id"])
        kwargs.setdefault("title", "")
        custom = kwargs.pop("custom_fields", None)
        if isinstance(custom, list):
            # Arrays behave like a mapping keyed by position
            kwargs["custom_fields"] = {str(i): v for i, v in enumerate(custom)}
        elif isinstance(custom, dict):
            kwargs["custom_fields"] = custom
        elif custom is not None:
            kwargs["custom_fields"] = {"value": custom}
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        d = {column: getattr(self, attr) for column, attr in COURSE_FIELDS.items()}
        d.update(self.extra)
        return d
