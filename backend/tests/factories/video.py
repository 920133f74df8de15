"""Factory Boy definition for :class:`mediahub.models.video.Video`."""

from __future__ import annotations

import factory

from mediahub.models.video import Video
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Video {n}")
    description = factory.LazyAttribute(lambda o: f"About {o.title}")
    thumbnail_url = factory.Sequence(lambda n: f"https://cdn.test/thumbs/{n}.jpg")
    video_url = factory.Sequence(lambda n: f"https://cdn.test/videos/{n}.mp4")
    duration = 120
    views = 0
    is_published = True
