# Page caps bound every paginated discovery call; there is no other cancellation.
MAX_DISCOVERY_PAGES = 100
MAX_REST_API_PAGES = 10

# get_rest_apis: default page size is 25, the service maximum is 500.
REST_API_PAGE_SIZE = 500

# Resource types that the Resource Groups Tagging API cannot serve directly.
AUTOSCALING_GROUP_TYPE = "asg"
TRANSIT_GATEWAY_ATTACHMENT_TYPE = "tgwa"
API_GATEWAY_TYPE = "apigateway"
