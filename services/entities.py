from services.management import ManagementScreen, UploadScreen


class EventScreen(ManagementScreen):
    table = "events"
    label = "Event"
    plural = "events"
    order_column = "event_date"
    ascending = True
    fields = (
        "title",
        "description",
        "event_date",
        "location",
        "registration_link",
        "registration_open_date",
        "registration_close_date",
    )
    optional_fields = ("location", "registration_link", "registration_open_date", "registration_close_date")
    datetime_fields = ("event_date", "registration_open_date", "registration_close_date")
    link_fields = ("registration_link",)
    stamp_field = "created_by"


class ResourceScreen(UploadScreen):
    table = "files"
    bucket = "files"
    url_field = "file_url"
    label = "Resource"
    plural = "resources"
    fields = ("title",)

    def upload_record(self, title, description, url, content_type):
        return {"title": title, "file_type": content_type or None, "file_url": url}


class GalleryScreen(UploadScreen):
    table = "gallery"
    bucket = "gallery"
    url_field = "image_url"
    label = "Image"
    plural = "gallery images"
    fields = ("title", "description")
    optional_fields = ("description",)

    def upload_record(self, title, description, url, content_type):
        return {"title": title, "description": description, "image_url": url}


class TeamScreen(ManagementScreen):
    table = "coordinators"
    label = "Team member"
    plural = "team members"
    order_column = "created_at"
    ascending = True
    fields = ("name", "role", "contact", "photo_url")
    optional_fields = ("contact", "photo_url")
    link_fields = ("photo_url",)


class AboutScreen(ManagementScreen):
    table = "club_info"
    label = "Club information"
    plural = "club information"
    order_column = "section"
    ascending = True
    fields = ("section", "title", "description")
    stamp_field = "created_by"


# Admin panel tabs -> screen class (dashboard ka koi screen nahi)
SCREENS = {
    "events": EventScreen,
    "resources": ResourceScreen,
    "gallery": GalleryScreen,
    "team": TeamScreen,
    "about": AboutScreen,
}
