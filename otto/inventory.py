"""
Projection of raw engine records into the dashboard display model.

Everything here is pure: records in, display objects out.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List

SHORT_ID_LENGTH = 10
DIGEST_PREFIX = 'sha256:'
GIB = 1024 * 1024 * 1024

RUNNING = 'running'
PAUSED = 'paused'
STOPPED = 'stopped'


@dataclass(frozen=True)
class PortSummary:
    ip: str
    private_port: int
    public_port: int
    type: str


@dataclass
class DisplayContainer:
    id: str
    name: str
    image: str
    version: str
    state: str
    status: str
    labels: Dict[str, str] = field(default_factory=dict)
    ports: List[PortSummary] = field(default_factory=list)


@dataclass
class EngineInfo:
    version: str = ''
    node_name: str = ''
    ncpu: int = 0
    mem_total: str = ''


@dataclass
class PageData:
    """What the listing template renders."""

    running: List[DisplayContainer] = field(default_factory=list)
    paused: List[DisplayContainer] = field(default_factory=list)
    stopped: List[DisplayContainer] = field(default_factory=list)
    engine: EngineInfo = field(default_factory=EngineInfo)

    @property
    def count_run(self):
        return len(self.running)

    @property
    def count_pau(self):
        return len(self.paused)

    @property
    def count_stp(self):
        return len(self.stopped)

    def add(self, container):
        getattr(self, bucket_for(container.state)).append(container)

    def to_dict(self):
        data = asdict(self)
        data['counts'] = {
            RUNNING: self.count_run,
            PAUSED: self.count_pau,
            STOPPED: self.count_stp,
        }
        return data


def extract_version(image):
    """
    Version shown next to the image name.

    A bare digest gives its first 12 hex characters, a tagged reference
    gives whatever follows the last colon (so registry ports are skipped),
    anything else is 'latest'.
    """
    if image.startswith(DIGEST_PREFIX):
        return image[7:19]
    i = image.rfind(':')
    if i != -1:
        return image[i + 1:]
    return 'latest'


def short_id(identifier):
    # Slicing keeps ids shorter than SHORT_ID_LENGTH whole
    return identifier[:SHORT_ID_LENGTH]


def display_name(names, fallback=''):
    if not names:
        return fallback
    name = names[0]
    if name.startswith('/'):
        name = name[1:]
    return name


def project_ports(ports):
    return [
        PortSummary(
            ip=p.get('IP') or '',
            private_port=p.get('PrivatePort') or 0,
            public_port=p.get('PublicPort') or 0,
            type=p.get('Type') or '',
        )
        for p in ports or []
    ]


def project_container(record):
    identifier = short_id(record['Id'])
    image = record.get('Image') or ''
    return DisplayContainer(
        id=identifier,
        name=display_name(record.get('Names'), fallback=identifier),
        image=image,
        version=extract_version(image),
        state=record.get('State') or '',
        status=record.get('Status') or '',
        labels=dict(record.get('Labels') or {}),
        ports=project_ports(record.get('Ports')),
    )


def bucket_for(state):
    """Every state other than running and paused counts as stopped."""
    if state == RUNNING:
        return RUNNING
    if state == PAUSED:
        return PAUSED
    return STOPPED


def build_page(records):
    page = PageData()
    for record in records:
        page.add(project_container(record))
    return page


def format_memory(n_bytes):
    return f'{n_bytes / GIB:.1f}GB'


def project_engine_info(info):
    return EngineInfo(
        version=info.get('ServerVersion') or '',
        node_name=info.get('Name') or '',
        ncpu=info.get('NCPU') or 0,
        mem_total=format_memory(info.get('MemTotal') or 0),
    )
