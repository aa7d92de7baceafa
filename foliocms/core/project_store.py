"""
Project Store
=============

projects.json is the single source of truth for portfolio projects: one
JSON array, one object per project. Every mutation snapshots the current
file into the backup directory before the new array replaces it.
"""

import json
import os
import tempfile
import threading
from datetime import datetime, timezone

from .errors import IOFailure, MalformedStore, NotFound, ValidationFailed
from .identifiers import assign_missing_ids, new_project_id
from .logging_service import logger

REQUIRED_TEXT_FIELDS = (
    ('name', 'Project name'),
    ('desc', 'Project description'),
    ('category', 'Project category'),
    ('image', 'Project image'),
)

# One writer lock per document path, shared by every store in the process
_write_locks = {}
_write_locks_guard = threading.Lock()


def _lock_for(path):
    key = os.path.abspath(path)
    with _write_locks_guard:
        if key not in _write_locks:
            _write_locks[key] = threading.Lock()
        return _write_locks[key]


class ProjectStore:
    """Load, validate and persist the project collection.

    Args:
        projects_path: Path of the canonical projects.json document.
        backup_dir: Directory receiving a snapshot before each write.
            Defaults to ``backups/`` next to the document's folder.
        persist_ids: Write each record's ``id`` into the document. When
            False ids are stripped on write (legacy layout) and records get
            positional ids again on the next read.
    """

    def __init__(self, projects_path, backup_dir=None, persist_ids=True):
        self.projects_path = projects_path
        if backup_dir is None:
            backup_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(projects_path))), 'backups')
        self.backup_dir = backup_dir
        self.persist_ids = persist_ids
        self._lock = _lock_for(projects_path)

    # ===== Document helpers =====

    def ensure_document(self):
        """Create the document (as an empty array) and its folder if missing."""
        doc_dir = os.path.dirname(os.path.abspath(self.projects_path))
        os.makedirs(doc_dir, exist_ok=True)
        if not os.path.exists(self.projects_path):
            self._write_document([])
            logger.info('projects', f"Created empty projects file at {self.projects_path}")

    def _read_document(self):
        try:
            with open(self.projects_path, 'r', encoding='utf-8') as f:
                raw = f.read()
        except FileNotFoundError:
            raise NotFound('Projects file not found')
        except OSError as e:
            raise IOFailure(f"Error reading projects: {e}")

        try:
            projects = json.loads(raw)
        except ValueError:
            raise MalformedStore('Invalid JSON format in projects file')

        if not isinstance(projects, list):
            raise MalformedStore('Projects file must contain a JSON array')
        seen_ids = set()
        for index, project in enumerate(projects):
            if not isinstance(project, dict):
                raise MalformedStore(f"Project at position {index} is not an object")
            project_id = project.get('id')
            if project_id:
                if not isinstance(project_id, (str, int)):
                    raise MalformedStore(f"Project at position {index} has an invalid id")
                if project_id in seen_ids:
                    raise MalformedStore(f"Duplicate project id '{project_id}' at position {index}")
                seen_ids.add(project_id)
        return projects

    def _write_document(self, projects):
        """Serialize to a temp file beside the document, then swap it in."""
        doc_dir = os.path.dirname(os.path.abspath(self.projects_path))
        json_data = json.dumps(projects, indent=2, ensure_ascii=False)

        fd, tmp_path = tempfile.mkstemp(prefix='.projects-', suffix='.tmp', dir=doc_dir)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(json_data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.projects_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def create_backup(self):
        """Copy the current document into the backup directory.

        Returns the backup file path. Raises IOFailure if the snapshot
        cannot be taken, before anything else is touched.
        """
        try:
            os.makedirs(self.backup_dir, exist_ok=True)
            timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H-%M-%S-%fZ')
            backup_name = f"projects-backup-{timestamp}.json"
            backup_path = os.path.join(self.backup_dir, backup_name)

            counter = 1
            while os.path.exists(backup_path):
                backup_path = os.path.join(self.backup_dir, f"projects-backup-{timestamp}_{counter:03d}.json")
                counter += 1

            with open(self.projects_path, 'rb') as src:
                data = src.read()
            with open(backup_path, 'xb') as dst:
                dst.write(data)
        except OSError as e:
            logger.error('projects', f"Error creating backup: {e}")
            raise IOFailure('Failed to create backup')

        logger.info('projects', f"Backup created: {os.path.basename(backup_path)}")
        return backup_path

    def list_backups(self):
        """Backup file paths, oldest first."""
        if not os.path.isdir(self.backup_dir):
            return []
        names = sorted(n for n in os.listdir(self.backup_dir)
                       if n.startswith('projects-backup-') and n.endswith('.json'))
        return [os.path.join(self.backup_dir, n) for n in names]

    # ===== Reads =====

    def load_all(self):
        """Read every project; records without an id get a positional one."""
        return assign_missing_ids(self._read_document())

    def get_one(self, identifier):
        """Find a project by id, falling back to a zero-based position."""
        projects = self.load_all()
        return projects[self._resolve_index(projects, identifier)]

    def categories(self):
        """Distinct categories, sorted"""
        return sorted({p.get('category') for p in self.load_all() if p.get('category')})

    @staticmethod
    def _resolve_index(projects, identifier):
        identifier = str(identifier)
        for index, project in enumerate(projects):
            if project.get('id') == identifier:
                return index

        # Plain ASCII digits only; int() would also take "1_0" or " 1"
        if identifier.isascii() and identifier.isdigit():
            index = int(identifier)
            if index < len(projects):
                return index

        raise NotFound('Project not found')

    # ===== Validation =====

    @staticmethod
    def validate(project):
        """Structural check of a candidate project.

        Only presence and types are checked here; URL format and category
        membership are enforced by the API layer.
        """
        errors = []
        if not isinstance(project, dict):
            return ['Project must be an object']

        for field, label in REQUIRED_TEXT_FIELDS:
            value = project.get(field)
            if not isinstance(value, str) or not value.strip():
                errors.append(f"{label} is required and must be a non-empty string")

        links = project.get('links')
        if not isinstance(links, dict):
            errors.append('Project links must be an object')
        else:
            if not isinstance(links.get('view'), str) or not links.get('view'):
                errors.append('Project view link is required and must be a string')
            if not isinstance(links.get('code'), str) or not links.get('code'):
                errors.append('Project code link is required and must be a string')

        return errors

    # ===== Writes =====

    def save_projects(self, projects):
        """Back up the current document, then overwrite it with ``projects``."""
        self.create_backup()

        if self.persist_ids:
            to_save = [dict(p) for p in projects]
        else:
            to_save = [{k: v for k, v in p.items() if k != 'id'} for p in projects]

        try:
            self._write_document(to_save)
        except (OSError, TypeError, ValueError) as e:
            logger.error('projects', f"Error saving projects: {e}")
            raise IOFailure(f"Error saving projects: {e}")

        logger.info('projects', f"Projects saved successfully ({len(to_save)} records)")

    def create(self, project_data):
        """Validate and append a new project; returns it with its new id."""
        errors = self.validate(project_data)
        if errors:
            raise ValidationFailed(errors)

        with self._lock:
            projects = self.load_all()
            new_project = {
                'id': new_project_id(p['id'] for p in projects),
                **{k: v for k, v in project_data.items() if k != 'id'},
            }
            projects.append(new_project)
            self.save_projects(projects)

        logger.info('projects', f"Project created: {new_project['id']}")
        return new_project

    def update(self, identifier, project_data):
        """Replace every field of a project, keeping its id."""
        with self._lock:
            projects = self.load_all()
            index = self._resolve_index(projects, identifier)

            errors = self.validate(project_data)
            if errors:
                raise ValidationFailed(errors)

            updated_project = {
                'id': projects[index]['id'],
                **{k: v for k, v in project_data.items() if k != 'id'},
            }
            projects[index] = updated_project
            self.save_projects(projects)

        logger.info('projects', f"Project updated: {updated_project['id']}")
        return updated_project

    def delete(self, identifier):
        """Remove a project; returns the removed record."""
        with self._lock:
            projects = self.load_all()
            index = self._resolve_index(projects, identifier)
            deleted_project = projects.pop(index)
            self.save_projects(projects)

        logger.info('projects', f"Project deleted: {deleted_project['id']}")
        return deleted_project
