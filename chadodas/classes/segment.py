import weakref
from typing import List, Union


class Typename:
    """Class for the type of a feature, combining the ontology term ('method') and the GFF source"""

    def __init__(self, method: str, source=None):
        self.method = method
        self.source = source

    def __eq__(self, other):
        return isinstance(other, Typename) and self.method == other.method and self.source == other.source

    def __hash__(self):
        return hash((self.method, self.source))

    def __str__(self):
        if self.source:
            return self.method + ":" + self.source
        return self.method

    def __repr__(self):
        return "<segment.Typename(method='{0}', source='{1}')>".format(self.method, self.source)

    @classmethod
    def from_string(cls, typename: str) -> 'Typename':
        """Parses a 'method:source' string"""
        method, _, source = typename.partition(":")
        return cls(method, source or None)


class Feature:
    """Class for a sequence feature with 1-based, inclusive coordinates on a named reference frame

    The feature holds a weak reference to the segment it was fetched for; callers keep the segment alive
    (see FeatureList)."""

    def __init__(self, feature_id: Union[None, int], name: Union[None, str], uniquename: Union[None, str],
                 type: Union[None, Typename], start: int, end: int, strand=0, phase=None, score=None, ref=None,
                 srcfeature_id=None, parent_segment=None, is_obsolete=False):
        self.feature_id = feature_id
        self.name = name
        self.uniquename = uniquename
        self.type = type
        self.start = start
        self.end = end
        self.strand = strand or 0
        self.phase = phase
        self.score = score
        self.ref = ref
        self.srcfeature_id = srcfeature_id
        self.is_obsolete = is_obsolete
        self.sub_features = []                                                      # type: List[Feature]
        self._parent = weakref.ref(parent_segment) if parent_segment is not None else None

    def __repr__(self):
        return "<segment.Feature(feature_id={0}, name='{1}', type='{2}', ref='{3}', start={4}, end={5}, " \
               "strand={6})>".format(self.feature_id, self.name, self.type, self.ref, self.start, self.end,
                                     self.strand)

    @classmethod
    def from_location(cls, fmin: int, fmax: int, **kwargs) -> 'Feature':
        """Creates a feature from zero-based, half-open interbase coordinates"""
        return cls(start=fmin + 1, end=fmax, **kwargs)

    @property
    def parent_segment(self):
        """The segment this feature was fetched for, if it is still alive"""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def fmin(self) -> int:
        return self.start - 1

    @property
    def fmax(self) -> int:
        return self.end

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def source(self) -> Union[None, str]:
        if self.type is None:
            return None
        return self.type.source

    @property
    def method(self) -> Union[None, str]:
        if self.type is None:
            return None
        return self.type.method

    @property
    def display_name(self) -> Union[None, str]:
        return self.name or self.uniquename

    def add_sub_feature(self, feature: 'Feature') -> None:
        self.sub_features.append(feature)


class Segment(Feature):
    """Class for a reference frame, or a range on one

    'srcfeature_id' is the frame on which overlap queries run and 'offset' the zero-based position of the
    segment's coordinate 1 on that frame."""

    def __init__(self, name: str, feature_id: Union[None, int], start: int, end: int, srcfeature_id=None, offset=0,
                 length=None, type=None, uniquename=None, score=None, strand=0):
        super().__init__(feature_id=feature_id, name=name, uniquename=uniquename, type=type, start=start, end=end,
                         strand=strand, score=score, ref=name,
                         srcfeature_id=srcfeature_id if srcfeature_id is not None else feature_id)
        self.offset = offset
        self.landmark_length = length if length is not None else end

    def __repr__(self):
        return "<segment.Segment(name='{0}', feature_id={1}, start={2}, end={3}, srcfeature_id={4}, offset={5})>"\
            .format(self.name, self.feature_id, self.start, self.end, self.srcfeature_id, self.offset)

    @property
    def frame_fmin(self) -> int:
        """Zero-based start of the segment on its reference frame"""
        return self.offset + self.start - 1

    @property
    def frame_fmax(self) -> int:
        """Exclusive end of the segment on its reference frame"""
        return self.offset + self.end

    def subsegment(self, start=None, end=None) -> 'Segment':
        """Creates a segment on the same landmark, restricted to the given range"""
        new_start = max(1, start if start is not None else self.start)
        new_end = min(self.landmark_length, end if end is not None else self.end)
        return Segment(self.name, self.feature_id, new_start, new_end, srcfeature_id=self.srcfeature_id,
                       offset=self.offset, length=self.landmark_length, type=self.type, uniquename=self.uniquename)


class FeatureSummary(Feature):
    """Class for a feature density summary over a segment"""

    def __init__(self, segment: Segment, coverage: List[float], label: str):
        score = sum(coverage) / len(coverage) if coverage else 0
        super().__init__(feature_id=None, name=label, uniquename=None, type=Typename("summary"),
                         start=segment.start, end=segment.end, score=score, ref=segment.name,
                         srcfeature_id=segment.srcfeature_id, parent_segment=segment)
        self.coverage = coverage
        self.bins = len(coverage)


class FeatureList(list):
    """List of features that keeps their parent segments alive"""

    def __init__(self, features=(), segments=()):
        super().__init__(features)
        self.segments = list(segments)

    def add_segment(self, segment: Segment) -> None:
        if not any(existing is segment for existing in self.segments):
            self.segments.append(segment)

    def extend_from(self, other: 'FeatureList') -> None:
        """Appends the features and segments of another list"""
        self.extend(other)
        for segment in getattr(other, "segments", []):
            self.add_segment(segment)
