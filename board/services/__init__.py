# Services package.
#
# Each module exposes a service class that encapsulates validation and the
# ownership gate for a single entity:
#
#   post_service      CRUD for Post
#   comment_service   CRUD for PostComment, returned joined with its Post
#   ownership         author-then-password check shared by both
#   validation        explicit required-field checks on input models
#
# Services receive their repositories and password hasher through the
# constructor, so the GraphQL layer (or a test) decides which session and
# which implementations they work against.
